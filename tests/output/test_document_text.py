"""Tests for the plain text compliance document formatter."""

import re
from typing import Callable

from license_intelligence.constants import LEGAL_DISCLAIMER
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import LicenseAnalysis
from license_intelligence.output.document_text import TextDocumentFormatter


def _with_text(analysis: LicenseAnalysis, text: str) -> LicenseAnalysis:
    assert analysis.primary_license is not None
    primary = analysis.primary_license.model_copy(update={"full_text": text})
    return analysis.model_copy(update={"primary_license": primary})


class TestTextDocumentFormatter:
    """Tests for TextDocumentFormatter."""

    def test_flat_layout(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test each package lists its licenses."""
        output = TextDocumentFormatter().format_document(
            [
                make_analysis("click", ["BSD-3-Clause"], version="8.1.0"),
                make_analysis("mystery", []),
            ],
            ComplianceDocumentOptions(),
        )

        assert output.startswith("LICENSE COMPLIANCE REPORT\n" + "=" * 25 + "\n")
        assert "Package: click@8.1.0\nLicenses: BSD-3-Clause" in output
        assert "Package: mystery@1.0.0\nLicenses: Unknown" in output
        assert LEGAL_DISCLAIMER in output

    def test_single_timestamp(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test the document carries exactly one generation timestamp."""
        output = TextDocumentFormatter().format_document(
            [make_analysis("a", ["MIT"])], ComplianceDocumentOptions()
        )
        stamps = re.findall(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", output)
        assert len(stamps) == 1
        assert f"Generated: {stamps[0]}" in output

    def test_grouped_layout(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test packages are grouped under their primary license."""
        output = TextDocumentFormatter().format_document(
            [
                make_analysis("a", ["MIT"]),
                make_analysis("b", ["Apache-2.0"]),
                make_analysis("c", ["MIT"]),
                make_analysis("d", []),
            ],
            ComplianceDocumentOptions(group_by_license=True),
        )

        assert "LICENSE: MIT\n" + "-" * 20 + "\n- a@1.0.0\n- c@1.0.0\n" in output
        assert "LICENSE: Unknown" in output
        assert output.index("LICENSE: MIT") < output.index("LICENSE: Apache-2.0")

    def test_copyright_notices(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test copyright statements are included only when requested."""
        analysis = make_analysis(
            "a", ["MIT"], copyright_statements=["Copyright 2020 A", "Copyright 2021 B"]
        )
        formatter = TextDocumentFormatter()

        flat = formatter.format_document(
            [analysis], ComplianceDocumentOptions(include_copyright_notices=True)
        )
        assert "Copyright: Copyright 2020 A; Copyright 2021 B" in flat

        grouped = formatter.format_document(
            [analysis],
            ComplianceDocumentOptions(group_by_license=True, include_copyright_notices=True),
        )
        assert "    Copyright 2020 A" in grouped

        omitted = formatter.format_document([analysis], ComplianceDocumentOptions())
        assert "Copyright 2020 A" not in omitted

    def test_license_texts(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test full license texts are embedded when available and requested."""
        analysis = _with_text(make_analysis("a", ["MIT"]), "FULL MIT TEXT")
        formatter = TextDocumentFormatter()

        with_texts = formatter.format_document(
            [analysis], ComplianceDocumentOptions(include_license_texts=True)
        )
        assert "License Text:\nFULL MIT TEXT" in with_texts

        grouped = formatter.format_document(
            [analysis],
            ComplianceDocumentOptions(group_by_license=True, include_license_texts=True),
        )
        assert "FULL MIT TEXT" in grouped

        assert "FULL MIT TEXT" not in formatter.format_document(
            [analysis], ComplianceDocumentOptions()
        )

    def test_header_and_footer(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test custom header and footer wrap the document."""
        output = TextDocumentFormatter().format_document(
            [make_analysis("a", ["MIT"])],
            ComplianceDocumentOptions(custom_header="ACME Corp", custom_footer="End."),
        )
        assert output.startswith("ACME Corp\n")
        assert output.endswith("End.\n")

    def test_empty(self) -> None:
        """Test an empty document still has title and disclaimer."""
        output = TextDocumentFormatter().format_document([], ComplianceDocumentOptions())
        assert "LICENSE COMPLIANCE REPORT" in output
        assert LEGAL_DISCLAIMER in output
