"""Markdown compliance document formatter."""

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


def _escape_cell(value: str) -> str:
    """Escape pipes so a value fits in one Markdown table cell."""
    return value.replace("|", "\\|")


class MarkdownDocumentFormatter:
    """Format license analyses as a Markdown compliance document."""

    def format_document(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> str:
        """Format analyses as a Markdown document.

        Args:
            analyses: Per-package license analyses.
            options: Document options.

        Returns:
            Markdown string.
        """
        lines: list[str] = []

        if options.custom_header:
            lines.append(options.custom_header)
            lines.append("")

        lines.append("# License Compliance Report")
        lines.append("")
        lines.append(f"*Generated: {generated_timestamp()}*")
        lines.append("")

        if options.group_by_license:
            lines.extend(self._format_groups(analyses, options))
        else:
            lines.extend(self._format_packages(analyses, options))

        lines.extend(self._format_disclaimer())

        if options.custom_footer:
            lines.append("")
            lines.append(options.custom_footer)

        return "\n".join(lines) + "\n"

    def _format_groups(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        lines: list[str] = []
        for license_id, group in group_by_primary_license(analyses).items():
            lines.append(f"## {license_id}")
            lines.append("")
            for analysis in group:
                lines.append(f"- {package_label(analysis)}")
                if options.include_copyright_notices:
                    for statement in analysis.copyright_statements:
                        lines.append(f"  - {statement}")
            lines.append("")

            if options.include_license_texts:
                text = group_license_text(group)
                if text:
                    lines.extend(["<details>", "<summary>License text</summary>", ""])
                    lines.extend(["```text", text, "```", "", "</details>", ""])
        return lines

    def _format_packages(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        include_copyright = options.include_copyright_notices
        if include_copyright:
            lines = [
                "| Package | Version | License | Copyright |",
                "|---------|---------|---------|-----------|",
            ]
        else:
            lines = [
                "| Package | Version | License |",
                "|---------|---------|---------|",
            ]

        for analysis in analyses:
            row = (
                f"| {_escape_cell(analysis.package.name)} "
                f"| {_escape_cell(analysis.package.version)} "
                f"| {license_ids(analysis)} |"
            )
            if include_copyright:
                notices = "<br>".join(analysis.copyright_statements)
                row += f" {_escape_cell(notices)} |"
            lines.append(row)
        lines.append("")

        if options.include_license_texts:
            for analysis in analyses:
                text = license_text(analysis)
                if text:
                    lines.extend([f"### {package_label(analysis)}", ""])
                    lines.extend(["```text", text, "```", ""])
        return lines

    def _format_disclaimer(self) -> list[str]:
        return [
            "> **NOT LEGAL ADVICE**",
            ">",
            f"> {LEGAL_DISCLAIMER}",
        ]
