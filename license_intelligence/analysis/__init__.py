"""License analysis logic for license-intelligence."""
from license_intelligence.analysis.compatibility import (
    CompatibilityEngine,
    normalize_license_id,
)
from license_intelligence.analysis.filtering import FilterResult, filter_ignored_packages
from license_intelligence.analysis.legal_risk import (
    assess_jurisdiction_risks,
    assess_legal_review_needs,
    assess_patent_risks,
    build_legal_risk_report,
    generate_compliance_requirements,
    identify_risk_factors,
)
from license_intelligence.analysis.policy import evaluate_policy
from license_intelligence.analysis.risk import (
    assess_license_risk,
    project_risk_level,
    project_risk_score,
    score_to_risk_level,
)

__all__ = [
    "CompatibilityEngine",
    "FilterResult",
    "assess_jurisdiction_risks",
    "assess_legal_review_needs",
    "assess_license_risk",
    "assess_patent_risks",
    "build_legal_risk_report",
    "evaluate_policy",
    "filter_ignored_packages",
    "generate_compliance_requirements",
    "identify_risk_factors",
    "normalize_license_id",
    "project_risk_level",
    "project_risk_score",
    "score_to_risk_level",
]
