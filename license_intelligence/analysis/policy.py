"""License policy checking against an organization's license policy."""
from __future__ import annotations

from typing import Optional

from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    LicenseCategory,
    RiskLevel,
)
from license_intelligence.models.policy import (
    LicensePolicy,
    PolicyAction,
    PolicyViolation,
)


def _category_action(
    category: LicenseCategory, policy: LicensePolicy
) -> Optional[PolicyAction]:
    """Action of the first category rule for ``category``, if any."""
    for rule in policy.category_rules:
        if rule.category == category:
            return rule.action
    return None


def _check_license(
    analysis: LicenseAnalysis, license_: License, policy: LicensePolicy
) -> list[PolicyViolation]:
    violations: list[PolicyViolation] = []
    package_name = analysis.package.name
    spdx_id = license_.spdx_id

    if spdx_id in policy.prohibited_licenses:
        violations.append(
            PolicyViolation(
                package=package_name,
                license=spdx_id,
                violation="License is explicitly prohibited",
                severity="critical",
            )
        )

    if (
        spdx_id in policy.review_required_licenses
        and spdx_id not in policy.allowed_licenses
    ):
        violations.append(
            PolicyViolation(
                package=package_name,
                license=spdx_id,
                violation="License requires legal review",
                severity="warning",
            )
        )

    if _category_action(license_.category, policy) == "prohibit":
        violations.append(
            PolicyViolation(
                package=package_name,
                license=spdx_id,
                violation=f"License category '{license_.category.value}' is prohibited",
                severity="error",
            )
        )

    if (
        analysis.risk_level == RiskLevel.CRITICAL
        and policy.risk_tolerance.maximum_risk_level != RiskLevel.CRITICAL
    ):
        violations.append(
            PolicyViolation(
                package=package_name,
                license=spdx_id,
                violation="License risk level exceeds policy tolerance",
                severity="critical",
            )
        )

    return violations


def evaluate_policy(
    analyses: list[LicenseAnalysis], policy: LicensePolicy
) -> list[PolicyViolation]:
    """Check every detected license against a license policy.

    Each (analysis, license) pair is run through four independent checks in
    a fixed order: prohibited license, review required without explicit
    approval, prohibited category and risk tolerance. Every check that
    applies adds its own violation.

    Args:
        analyses: Per-package license analyses.
        policy: Policy supplied by the caller.

    Returns:
        Violations in analysis, license and check order. An empty list means
        the analyses comply with the policy.
    """
    violations: list[PolicyViolation] = []
    for analysis in analyses:
        for license_ in analysis.licenses:
            violations.extend(_check_license(analysis, license_, policy))
    return violations
