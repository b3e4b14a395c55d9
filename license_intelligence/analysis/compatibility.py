"""License compatibility checking for license-intelligence.

Provides pairwise license compatibility rules and a project-wide
compatibility report. Uses the license-expression library for SPDX parsing
and normalization.
"""
from __future__ import annotations

import logging
from typing import Optional

from license_expression import ExpressionError, get_spdx_licensing

from license_intelligence.models.compatibility import (
    CompatibilityReport,
    CompatibilityResult,
    CompatibilityStatus,
    CompatibilitySummary,
    LicenseConflict,
)
from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    LicenseCategory,
    Package,
    ScanOptions,
)

logger = logging.getLogger(__name__)

# Initialize SPDX licensing for parsing
_licensing = get_spdx_licensing()

# Strong copyleft licenses - GPL family
GPL_LICENSES: set[str] = {
    "GPL-2.0-only",
    "GPL-2.0-or-later",
    "GPL-3.0-only",
    "GPL-3.0-or-later",
}

# GPL-3.0 specific variants
GPL_3_LICENSES: set[str] = {
    "GPL-3.0-only",
    "GPL-3.0-or-later",
}

# GPL-2.0 specific variants (only, not or-later)
GPL_2_ONLY_LICENSES: set[str] = {
    "GPL-2.0-only",
}

# AGPL licenses - network copyleft
AGPL_LICENSES: set[str] = {
    "AGPL-3.0-only",
    "AGPL-3.0-or-later",
}

# Risk added to the report score per conflicting / unclear license pair
CONFLICT_RISK_WEIGHT = 25
UNKNOWN_RISK_WEIGHT = 5
MAX_RISK_SCORE = 100


def normalize_license_id(license_id: str) -> str:
    """Normalize license ID using license-expression library.

    Handles deprecated spellings such as ``GPL-3.0`` -> ``GPL-3.0-only``.
    Identifiers the SPDX list does not know are returned unchanged.

    Args:
        license_id: SPDX license identifier.

    Returns:
        Normalized SPDX license key.
    """
    license_id = license_id.strip()
    try:
        parsed = _licensing.parse(license_id, validate=True)
    except ExpressionError:
        return license_id
    # Compound expressions are kept as written
    key = getattr(parsed, "key", None)
    return str(key) if key else license_id


def _result(
    a: License, b: License, status: CompatibilityStatus, reason: str
) -> CompatibilityResult:
    return CompatibilityResult(
        license_a=a.spdx_id, license_b=b.spdx_id, status=status, reason=reason
    )


def _either(a: str, b: str, group: set[str]) -> Optional[tuple[str, str]]:
    """Return (member, other) if exactly one side is in ``group``."""
    if a in group:
        return a, b
    if b in group:
        return b, a
    return None


class CompatibilityEngine:
    """Rule-based license compatibility engine.

    Rules are applied in order and the first one that matches decides:
    same license, public domain or permissive on either side, proprietary
    terms, the GPL family, AGPL and finally weak copyleft. Pairs no rule
    covers are reported as UNKNOWN.
    """

    def check_pair(self, license_a: License, license_b: License) -> CompatibilityResult:
        """Check if two licenses can be combined in one project.

        Args:
            license_a: First license.
            license_b: Second license.

        Returns:
            CompatibilityResult with status and reason.
        """
        a = normalize_license_id(license_a.spdx_id)
        b = normalize_license_id(license_b.spdx_id)
        cat_a, cat_b = license_a.category, license_b.category

        # Same license is always compatible
        if a == b:
            return _result(
                license_a, license_b, CompatibilityStatus.COMPATIBLE, "Same license"
            )

        if LicenseCategory.PUBLIC_DOMAIN in (cat_a, cat_b):
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                "Public domain code can be combined with any license",
            )

        # Both permissive - always compatible
        if cat_a == LicenseCategory.PERMISSIVE and cat_b == LicenseCategory.PERMISSIVE:
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                "Both licenses are permissive",
            )

        # Permissive + anything else - permissive can be used in copyleft projects
        if LicenseCategory.PERMISSIVE in (cat_a, cat_b):
            permissive = a if cat_a == LicenseCategory.PERMISSIVE else b
            other = b if permissive == a else a
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                f"{permissive} code can be used in {other} projects",
            )

        if LicenseCategory.PROPRIETARY in (cat_a, cat_b):
            proprietary = a if cat_a == LicenseCategory.PROPRIETARY else b
            other = b if proprietary == a else a
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.INCOMPATIBLE,
                f"{proprietary} cannot be combined with {other}",
            )

        # GPL + GPL (same family)
        if a in GPL_LICENSES and b in GPL_LICENSES:
            # GPL-2.0-only with GPL-3.0 = incompatible
            if (a in GPL_2_ONLY_LICENSES and b in GPL_3_LICENSES) or (
                b in GPL_2_ONLY_LICENSES and a in GPL_3_LICENSES
            ):
                return _result(
                    license_a,
                    license_b,
                    CompatibilityStatus.INCOMPATIBLE,
                    "GPL-2.0-only is not compatible with GPL-3.0",
                )
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                "Both licenses are in the GPL family",
            )

        # AGPL + GPL-3.0 = compatible (AGPL is based on GPL-3.0)
        agpl_pair = _either(a, b, AGPL_LICENSES)
        if agpl_pair is not None:
            agpl, other_id = agpl_pair
            if other_id in GPL_3_LICENSES or other_id in AGPL_LICENSES:
                return _result(
                    license_a,
                    license_b,
                    CompatibilityStatus.COMPATIBLE,
                    "AGPL-3.0 is compatible with GPL-3.0",
                )
            # AGPL + other copyleft = potentially problematic
            other_category = cat_b if agpl == a else cat_a
            if other_category == LicenseCategory.COPYLEFT:
                return _result(
                    license_a,
                    license_b,
                    CompatibilityStatus.INCOMPATIBLE,
                    f"{agpl} network copyleft may conflict with {other_id}",
                )

        weak = LicenseCategory.WEAK_COPYLEFT
        # Weak copyleft + GPL = generally compatible (LGPL can link with GPL)
        if (cat_a == weak and b in GPL_LICENSES) or (cat_b == weak and a in GPL_LICENSES):
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                "Weak copyleft licenses can be used with GPL",
            )

        # Weak copyleft + weak copyleft = compatible
        if cat_a == weak and cat_b == weak:
            return _result(
                license_a,
                license_b,
                CompatibilityStatus.COMPATIBLE,
                "Both licenses are weak copyleft",
            )

        # Default: unknown compatibility
        return _result(
            license_a,
            license_b,
            CompatibilityStatus.UNKNOWN,
            f"Compatibility between {a} and {b} is unclear",
        )

    def report(
        self,
        packages: list[Package],
        analyses: list[LicenseAnalysis],
        options: Optional[ScanOptions] = None,
    ) -> CompatibilityReport:
        """Build a project-wide compatibility report.

        Every unordered pair of distinct licenses found across the analyses
        is checked once. Incompatible pairs become conflicts; pairs of
        unknown compatibility become warnings.

        Args:
            packages: Packages the analyses were produced for.
            analyses: Per-package license analyses.
            options: Scan options used for the analyses (unused by the rules).

        Returns:
            CompatibilityReport with conflicts, warnings and summary.
        """
        licenses: dict[str, License] = {}
        packages_by_license: dict[str, list[str]] = {}
        for analysis in analyses:
            for license_ in analysis.licenses:
                licenses.setdefault(license_.spdx_id, license_)
                holders = packages_by_license.setdefault(license_.spdx_id, [])
                if analysis.package.name not in holders:
                    holders.append(analysis.package.name)

        unique = list(licenses.values())
        conflicts: list[LicenseConflict] = []
        warnings: list[CompatibilityResult] = []

        # Check all pairs (i+1 slicing prevents duplicate symmetric checks)
        for i, license_a in enumerate(unique):
            for license_b in unique[i + 1 :]:
                result = self.check_pair(license_a, license_b)
                if result.status == CompatibilityStatus.INCOMPATIBLE:
                    affected = packages_by_license[license_a.spdx_id] + [
                        name
                        for name in packages_by_license[license_b.spdx_id]
                        if name not in packages_by_license[license_a.spdx_id]
                    ]
                    conflicts.append(
                        LicenseConflict(
                            license_a=license_a.spdx_id,
                            license_b=license_b.spdx_id,
                            reason=result.reason,
                            packages=affected,
                        )
                    )
                elif result.status == CompatibilityStatus.UNKNOWN:
                    warnings.append(result)

        if conflicts:
            overall = "incompatible"
        elif warnings:
            overall = "review_required"
        else:
            overall = "compatible"

        risk_score = min(
            MAX_RISK_SCORE,
            len(conflicts) * CONFLICT_RISK_WEIGHT + len(warnings) * UNKNOWN_RISK_WEIGHT,
        )

        logger.debug(
            "Compatibility report: %d licenses, %d conflicts, %d unclear pairs",
            len(unique),
            len(conflicts),
            len(warnings),
        )

        return CompatibilityReport(
            conflicts=conflicts,
            warnings=warnings,
            overall_compatibility=overall,
            summary=CompatibilitySummary(
                total_packages=len(packages),
                total_licenses=len(unique),
                conflict_count=len(conflicts),
                unknown_count=len(warnings),
                risk_score=risk_score,
            ),
        )
