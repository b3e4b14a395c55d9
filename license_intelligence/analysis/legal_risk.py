"""Legal risk assessment over a set of license analyses.

Every function here is pure: it reads already-computed analyses and a
compatibility report and returns report sections. ``build_legal_risk_report``
assembles them into a ``LegalRiskReport``.
"""
from __future__ import annotations

from license_intelligence.analysis.risk import project_risk_level, project_risk_score
from license_intelligence.models.compatibility import CompatibilityReport
from license_intelligence.models.license import (
    LicenseAnalysis,
    LicenseCategory,
    ObligationType,
    RiskLevel,
)
from license_intelligence.models.risk import (
    URGENCY_ORDER,
    ComplianceRequirement,
    JurisdictionRisk,
    LegalReview,
    LegalRiskReport,
    PatentRisk,
    ProjectIdentity,
    ReviewUrgency,
    RiskFactor,
)

CONFLICT_FACTOR_WEIGHT = 20
COPYLEFT_FACTOR_WEIGHT = 10
MISSING_LICENSE_FACTOR_WEIGHT = 15
HOURS_PER_REVIEW_AREA = 4

SCOPE_CRITICAL = "Critical risk mitigation"
SCOPE_COMPATIBILITY = "License compatibility analysis"
SCOPE_GENERAL = "General license compliance review"


def identify_risk_factors(
    analyses: list[LicenseAnalysis], compatibility_report: CompatibilityReport
) -> list[RiskFactor]:
    """Derive risk factors from conflicts, copyleft use and missing licenses.

    Each source produces at most one factor whose score scales with the
    number of occurrences.
    """
    factors: list[RiskFactor] = []

    conflict_count = len(compatibility_report.conflicts)
    if conflict_count:
        factors.append(
            RiskFactor(
                category="license_compatibility",
                description=f"{conflict_count} license compatibility conflicts detected",
                impact="critical",
                likelihood="high",
                risk_score=conflict_count * CONFLICT_FACTOR_WEIGHT,
                mitigation="Remove conflicting dependencies or find compatible alternatives",
            )
        )

    copyleft_count = sum(
        1 for a in analyses if a.has_category(LicenseCategory.COPYLEFT)
    )
    if copyleft_count:
        factors.append(
            RiskFactor(
                category="compliance",
                description=(
                    f"{copyleft_count} packages with copyleft licenses requiring compliance"
                ),
                impact="high",
                likelihood="medium",
                risk_score=copyleft_count * COPYLEFT_FACTOR_WEIGHT,
                mitigation="Implement proper compliance procedures for license obligations",
            )
        )

    missing_count = sum(1 for a in analyses if not a.licenses)
    if missing_count:
        factors.append(
            RiskFactor(
                category="governance",
                description=f"{missing_count} packages with unknown or missing licenses",
                impact="high",
                likelihood="high",
                risk_score=missing_count * MISSING_LICENSE_FACTOR_WEIGHT,
                mitigation=(
                    "Contact package maintainers to clarify licensing or find alternatives"
                ),
            )
        )

    return factors


def assess_jurisdiction_risks(analyses: list[LicenseAnalysis]) -> list[JurisdictionRisk]:
    """One global entry when any package uses an AGPL license."""
    has_agpl = any(
        "AGPL" in license_.spdx_id for a in analyses for license_ in a.licenses
    )
    if not has_agpl:
        return []
    return [
        JurisdictionRisk(
            jurisdiction="Global",
            risk_level=RiskLevel.HIGH,
            specific_risks=["AGPL network copyleft obligations for web services"],
        )
    ]


def assess_patent_risks(analyses: list[LicenseAnalysis]) -> list[PatentRisk]:
    """One MEDIUM entry per detected license carrying a patent grant."""
    risks: list[PatentRisk] = []
    for analysis in analyses:
        for license_ in analysis.licenses:
            if ObligationType.PATENT_GRANT in license_.obligations:
                risks.append(
                    PatentRisk(
                        license=license_,
                        patent_clauses=["Patent grant and termination clauses"],
                        risk_description=(
                            "License includes patent provisions that may affect "
                            "patent strategy"
                        ),
                        risk_level=RiskLevel.MEDIUM,
                    )
                )
    return risks


def generate_compliance_requirements(
    analyses: list[LicenseAnalysis],
) -> list[ComplianceRequirement]:
    """Requirements implied by the obligations found, each at most once."""
    requirements: list[ComplianceRequirement] = []

    if any(a.has_obligation(ObligationType.ATTRIBUTION) for a in analyses):
        requirements.append(
            ComplianceRequirement(
                requirement="Create and maintain attribution documentation",
                responsible="Development Team",
            )
        )

    if any(a.has_obligation(ObligationType.DISCLOSE_SOURCE) for a in analyses):
        requirements.append(
            ComplianceRequirement(
                requirement="Implement source code disclosure procedures",
                responsible="Legal Team",
            )
        )

    return requirements


def _raise_urgency(current: ReviewUrgency, minimum: ReviewUrgency) -> ReviewUrgency:
    """Return the higher of two urgencies."""
    return max(current, minimum, key=URGENCY_ORDER.index)


def assess_legal_review_needs(
    overall_risk: RiskLevel, risk_factors: list[RiskFactor]
) -> LegalReview:
    """Decide whether a legal review is needed and how urgently.

    Rules are cumulative: each applicable rule marks the review as required,
    adds its scope area and raises the urgency to at least its own level.
    Urgency is never lowered by a later rule.

    Args:
        overall_risk: Project-level risk.
        risk_factors: Factors from ``identify_risk_factors``.

    Returns:
        LegalReview with ``estimated_hours`` of four per scope area.
    """
    required = False
    urgency: ReviewUrgency = "low"
    scope: list[str] = []

    if overall_risk == RiskLevel.CRITICAL or any(
        f.impact == "critical" for f in risk_factors
    ):
        required = True
        urgency = _raise_urgency(urgency, "urgent")
        scope.append(SCOPE_CRITICAL)

    if any(f.category == "license_compatibility" for f in risk_factors):
        required = True
        urgency = _raise_urgency(urgency, "high")
        scope.append(SCOPE_COMPATIBILITY)

    if overall_risk in (RiskLevel.HIGH, RiskLevel.VERY_HIGH):
        required = True
        urgency = _raise_urgency(urgency, "medium")
        scope.append(SCOPE_GENERAL)

    return LegalReview(
        required=required,
        urgency=urgency,
        scope=scope,
        estimated_hours=len(scope) * HOURS_PER_REVIEW_AREA,
    )


def build_legal_risk_report(
    project: ProjectIdentity,
    analyses: list[LicenseAnalysis],
    compatibility_report: CompatibilityReport,
) -> LegalRiskReport:
    """Assemble a legal risk report from analyses and a compatibility report.

    Args:
        project: Identity of the assessed project.
        analyses: Successful per-package analyses.
        compatibility_report: Report over the same analyses.

    Returns:
        Complete LegalRiskReport.
    """
    risk_score = project_risk_score(analyses, compatibility_report)
    overall_risk = project_risk_level(risk_score)
    risk_factors = identify_risk_factors(analyses, compatibility_report)

    return LegalRiskReport(
        project=project,
        overall_risk=overall_risk,
        risk_score=risk_score,
        risk_factors=risk_factors,
        jurisdiction_risks=assess_jurisdiction_risks(analyses),
        patent_risks=assess_patent_risks(analyses),
        compliance_requirements=generate_compliance_requirements(analyses),
        legal_review=assess_legal_review_needs(overall_risk, risk_factors),
    )
