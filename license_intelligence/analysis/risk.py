"""Risk scoring for license-intelligence.

Maps weighted scores to ``RiskLevel`` tiers. Per-package scores use the
license scale (category and obligation weights); project scores use the
0-100 scale.
"""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Iterable, Mapping

from license_intelligence.models.compatibility import CompatibilityReport
from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    LicenseCategory,
    LicenseObligation,
    RiskLevel,
)

CATEGORY_WEIGHTS: Mapping[LicenseCategory, int] = MappingProxyType(
    {
        LicenseCategory.PERMISSIVE: 1,
        LicenseCategory.WEAK_COPYLEFT: 3,
        LicenseCategory.COPYLEFT: 5,
        LicenseCategory.PROPRIETARY: 10,
        LicenseCategory.CUSTOM: 7,
        LicenseCategory.UNKNOWN: 8,
        LicenseCategory.PUBLIC_DOMAIN: 0,
    }
)

SEVERITY_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {"critical": 10, "high": 5, "medium": 2, "low": 1}
)

# Weight of each per-package risk level in the project score
RISK_LEVEL_WEIGHTS: Mapping[RiskLevel, int] = MappingProxyType(
    {
        RiskLevel.CRITICAL: 20,
        RiskLevel.VERY_HIGH: 15,
        RiskLevel.HIGH: 10,
        RiskLevel.MEDIUM: 5,
        RiskLevel.LOW: 2,
        RiskLevel.VERY_LOW: 1,
    }
)

# Inclusive lower bounds, highest first
LICENSE_RISK_BREAKPOINTS: tuple[tuple[int, RiskLevel], ...] = (
    (20, RiskLevel.CRITICAL),
    (15, RiskLevel.VERY_HIGH),
    (10, RiskLevel.HIGH),
    (5, RiskLevel.MEDIUM),
    (2, RiskLevel.LOW),
)

PROJECT_RISK_BREAKPOINTS: tuple[tuple[int, RiskLevel], ...] = (
    (80, RiskLevel.CRITICAL),
    (60, RiskLevel.VERY_HIGH),
    (40, RiskLevel.HIGH),
    (20, RiskLevel.MEDIUM),
    (10, RiskLevel.LOW),
)

MAX_PROJECT_RISK_SCORE = 100


def score_to_risk_level(
    score: float, breakpoints: tuple[tuple[int, RiskLevel], ...]
) -> RiskLevel:
    """Map a score to the first tier whose lower bound it reaches.

    Args:
        score: Weighted score.
        breakpoints: (lower bound, level) pairs ordered highest first.

    Returns:
        Matching risk level, or VERY_LOW below every bound.
    """
    for lower_bound, level in breakpoints:
        if score >= lower_bound:
            return level
    return RiskLevel.VERY_LOW


def license_risk_score(
    licenses: Iterable[License], obligations: Iterable[LicenseObligation]
) -> int:
    """Sum category weights of licenses and severity weights of obligations."""
    score = sum(CATEGORY_WEIGHTS[lic.category] for lic in licenses)
    score += sum(SEVERITY_WEIGHTS[ob.severity] for ob in obligations)
    return score


def assess_license_risk(
    licenses: Iterable[License], obligations: Iterable[LicenseObligation]
) -> RiskLevel:
    """Per-package risk level for a set of licenses and their obligations."""
    return score_to_risk_level(
        license_risk_score(licenses, obligations), LICENSE_RISK_BREAKPOINTS
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def project_risk_score(
    analyses: list[LicenseAnalysis], compatibility_report: CompatibilityReport
) -> int:
    """Project risk score on the 0-100 scale.

    The mean per-package risk weight plus the compatibility report's own
    risk score, rounded half up and clamped. With no analyses there is
    nothing to average and the score is 0.

    Args:
        analyses: Successful per-package analyses.
        compatibility_report: Report from the compatibility engine.

    Returns:
        Integer score between 0 and 100.
    """
    if not analyses:
        return 0

    mean_weight = sum(RISK_LEVEL_WEIGHTS[a.risk_level] for a in analyses) / len(
        analyses
    )
    score = _round_half_up(mean_weight + compatibility_report.summary.risk_score)
    return max(0, min(score, MAX_PROJECT_RISK_SCORE))


def project_risk_level(score: float) -> RiskLevel:
    """Overall project risk level for a 0-100 score."""
    return score_to_risk_level(score, PROJECT_RISK_BREAKPOINTS)
