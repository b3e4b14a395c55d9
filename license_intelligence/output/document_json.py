"""JSON compliance document formatter."""
import json
from typing import Any

from license_intelligence import __version__
from license_intelligence.constants import LEGAL_DISCLAIMER
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import LicenseAnalysis
from license_intelligence.output.grouping import (
    generated_timestamp,
    group_by_primary_license,
    group_license_text,
    license_text,
)


class JsonDocumentFormatter:
    """Format license analyses as a JSON compliance document.

    Provides a structured representation for programmatic processing and
    CI/CD integration.
    """

    def format_document(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> str:
        """Format analyses as a JSON string.

        Args:
            analyses: Per-package license analyses.
            options: Document options.

        Returns:
            JSON string representation of the document.
        """
        output = self._build_output(analyses, options)
        return json.dumps(output, indent=2)

    def _build_output(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> dict[str, Any]:
        output: dict[str, Any] = {
            "generated_at": generated_timestamp(),
            "tool_version": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
        }
        if options.custom_header:
            output["header"] = options.custom_header

        if options.group_by_license:
            output["groups"] = self._build_groups(analyses, options)
        else:
            output["packages"] = [
                self._build_package(analysis, options) for analysis in analyses
            ]

        if options.custom_footer:
            output["footer"] = options.custom_footer
        return output

    def _build_groups(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[dict[str, Any]]:
        groups: list[dict[str, Any]] = []
        for license_id, group in group_by_primary_license(analyses).items():
            entry: dict[str, Any] = {
                "license": license_id,
                "packages": [self._build_package(a, options) for a in group],
            }
            if options.include_license_texts:
                entry["license_text"] = group_license_text(group)
            groups.append(entry)
        return groups

    def _build_package(
        self, analysis: LicenseAnalysis, options: ComplianceDocumentOptions
    ) -> dict[str, Any]:
        """Build one package entry.

        Args:
            analysis: The package's license analysis.
            options: Document options.

        Returns:
            Dictionary ready for JSON serialization.
        """
        package: dict[str, Any] = {
            "name": analysis.package.name,
            "version": analysis.package.version,
            "licenses": [
                {
                    "spdx_id": lic.spdx_id,
                    "name": lic.name,
                    "category": lic.category.value,
                    "url": lic.url,
                }
                for lic in analysis.licenses
            ],
            "primary_license": (
                analysis.primary_license.spdx_id
                if analysis.primary_license is not None
                else None
            ),
            "risk_level": analysis.risk_level.value,
        }
        if options.include_copyright_notices:
            package["copyright_statements"] = list(analysis.copyright_statements)
        if options.include_license_texts and not options.group_by_license:
            package["license_text"] = license_text(analysis)
        return package
