"""Plain text compliance document formatter."""

from license_intelligence.constants import LEGAL_DISCLAIMER
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import LicenseAnalysis
from license_intelligence.output.grouping import (
    generated_timestamp,
    group_by_primary_license,
    group_license_text,
    license_ids,
    license_text,
    package_label,
)

TITLE = "LICENSE COMPLIANCE REPORT"


class TextDocumentFormatter:
    """Format license analyses as a plain text compliance document.

    Suitable for shipping as a NOTICE-style file next to a distribution.
    """

    def format_document(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> str:
        """Format analyses as a plain text document.

        Args:
            analyses: Per-package license analyses.
            options: Document options.

        Returns:
            Plain text document.
        """
        lines: list[str] = []

        if options.custom_header:
            lines.append(options.custom_header)
            lines.append("")

        lines.append(TITLE)
        lines.append("=" * len(TITLE))
        lines.append("")
        lines.append(f"Generated: {generated_timestamp()}")
        lines.append("")

        if options.group_by_license:
            lines.extend(self._format_groups(analyses, options))
        else:
            lines.extend(self._format_packages(analyses, options))

        lines.append(LEGAL_DISCLAIMER)

        if options.custom_footer:
            lines.append("")
            lines.append(options.custom_footer)

        return "\n".join(lines) + "\n"

    def _format_groups(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        lines: list[str] = []
        for license_id, group in group_by_primary_license(analyses).items():
            lines.append(f"LICENSE: {license_id}")
            lines.append("-" * 20)
            for analysis in group:
                lines.append(f"- {package_label(analysis)}")
                if options.include_copyright_notices:
                    for statement in analysis.copyright_statements:
                        lines.append(f"    {statement}")

            if options.include_license_texts:
                text = group_license_text(group)
                if text:
                    lines.append("")
                    lines.append("License Text:")
                    lines.append(text)

            lines.append("")
        return lines

    def _format_packages(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        lines: list[str] = []
        for analysis in analyses:
            lines.append(f"Package: {package_label(analysis)}")
            lines.append(f"Licenses: {license_ids(analysis)}")

            if options.include_copyright_notices and analysis.copyright_statements:
                lines.append(f"Copyright: {'; '.join(analysis.copyright_statements)}")

            if options.include_license_texts:
                text = license_text(analysis)
                if text:
                    lines.append("License Text:")
                    lines.append(text)

            lines.append("")
        return lines
