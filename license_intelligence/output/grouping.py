"""Helpers shared by the compliance document formatters."""

from datetime import datetime, timezone
from typing import Optional

from license_intelligence.models.license import LicenseAnalysis

UNKNOWN_GROUP = "Unknown"


def generated_timestamp() -> str:
    """Current UTC time in ISO-8601 form, e.g. ``2024-05-01T12:00:00Z``."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def package_label(analysis: LicenseAnalysis) -> str:
    """``name@version`` label for an analysed package."""
    return f"{analysis.package.name}@{analysis.package.version}"


def license_ids(analysis: LicenseAnalysis) -> str:
    """Comma separated SPDX ids of an analysis, or ``Unknown``."""
    if not analysis.licenses:
        return UNKNOWN_GROUP
    return ", ".join(lic.spdx_id for lic in analysis.licenses)


def group_by_primary_license(
    analyses: list[LicenseAnalysis],
) -> dict[str, list[LicenseAnalysis]]:
    """Group analyses by primary license SPDX id.

    Groups appear in the order their license is first seen. Analyses
    without a primary license fall in the ``Unknown`` group.

    Args:
        analyses: Analyses to group.

    Returns:
        Mapping of SPDX id to the analyses using it as primary license.
    """
    groups: dict[str, list[LicenseAnalysis]] = {}
    for analysis in analyses:
        key = (
            analysis.primary_license.spdx_id
            if analysis.primary_license is not None
            else UNKNOWN_GROUP
        )
        groups.setdefault(key, []).append(analysis)
    return groups


def license_text(analysis: LicenseAnalysis) -> Optional[str]:
    """Full text of the analysis' primary license, if the store carries it."""
    if analysis.primary_license is None:
        return None
    return analysis.primary_license.full_text


def group_license_text(analyses: list[LicenseAnalysis]) -> Optional[str]:
    """Full text of the first license in a group that carries one."""
    for analysis in analyses:
        text = license_text(analysis)
        if text:
            return text
    return None
