"""HTML compliance document formatter."""

from html import escape

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

STYLE = "body { font-family: Arial, sans-serif; margin: 20px; }"


class HtmlDocumentFormatter:
    """Format license analyses as a standalone HTML page.

    All analysis derived text is escaped. The custom header and footer are
    inserted as given so callers can supply their own markup.
    """

    def format_document(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> str:
        """Format analyses as an HTML document.

        Args:
            analyses: Per-package license analyses.
            options: Document options.

        Returns:
            HTML string.
        """
        lines = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            "<title>License Compliance Report</title>",
            f"<style>{STYLE}</style>",
            "</head>",
            "<body>",
        ]

        if options.custom_header:
            lines.append(options.custom_header)

        lines.append("<h1>License Compliance Report</h1>")
        lines.append(f"<p>Generated: {generated_timestamp()}</p>")

        if options.group_by_license:
            lines.extend(self._format_groups(analyses, options))
        else:
            lines.extend(self._format_packages(analyses, options))

        lines.append(f"<p><em>{escape(LEGAL_DISCLAIMER)}</em></p>")

        if options.custom_footer:
            lines.append(options.custom_footer)

        lines.extend(["</body>", "</html>"])
        return "\n".join(lines) + "\n"

    def _format_groups(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        lines: list[str] = []
        for license_id, group in group_by_primary_license(analyses).items():
            lines.append(f"<h2>{escape(license_id)}</h2>")
            lines.append("<ul>")
            for analysis in group:
                item = escape(package_label(analysis))
                if options.include_copyright_notices and analysis.copyright_statements:
                    notices = "<br>".join(
                        escape(s) for s in analysis.copyright_statements
                    )
                    item += f"<br><small>{notices}</small>"
                lines.append(f"<li>{item}</li>")
            lines.append("</ul>")

            if options.include_license_texts:
                text = group_license_text(group)
                if text:
                    lines.append(f"<pre>{escape(text)}</pre>")
        return lines

    def _format_packages(
        self, analyses: list[LicenseAnalysis], options: ComplianceDocumentOptions
    ) -> list[str]:
        include_copyright = options.include_copyright_notices
        header = "<tr><th>Package</th><th>Version</th><th>License</th>"
        if include_copyright:
            header += "<th>Copyright</th>"
        header += "</tr>"

        lines = ['<table border="1">', header]
        for analysis in analyses:
            row = (
                f"<tr><td>{escape(analysis.package.name)}</td>"
                f"<td>{escape(analysis.package.version)}</td>"
                f"<td>{escape(license_ids(analysis))}</td>"
            )
            if include_copyright:
                notices = "<br>".join(escape(s) for s in analysis.copyright_statements)
                row += f"<td>{notices}</td>"
            row += "</tr>"
            lines.append(row)
        lines.append("</table>")

        if options.include_license_texts:
            for analysis in analyses:
                text = license_text(analysis)
                if text:
                    lines.append(f"<h3>{escape(package_label(analysis))}</h3>")
                    lines.append(f"<pre>{escape(text)}</pre>")
        return lines
