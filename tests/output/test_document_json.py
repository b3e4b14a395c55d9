"""Tests for the JSON compliance document formatter."""

import json
from typing import Callable

from license_intelligence import __version__
from license_intelligence.constants import LEGAL_DISCLAIMER
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import LicenseAnalysis
from license_intelligence.output.document_json import JsonDocumentFormatter


class TestJsonDocumentFormatter:
    """Tests for JsonDocumentFormatter."""

    def test_flat_document(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test the flat document lists packages with license details."""
        output = JsonDocumentFormatter().format_document(
            [make_analysis("requests", ["Apache-2.0"], version="2.28.0")],
            ComplianceDocumentOptions(format="json"),
        )
        data = json.loads(output)

        assert data["tool_version"] == __version__
        assert data["disclaimer"] == LEGAL_DISCLAIMER
        assert data["generated_at"].endswith("Z")
        assert "groups" not in data
        assert "header" not in data

        package = data["packages"][0]
        assert package["name"] == "requests"
        assert package["version"] == "2.28.0"
        assert package["primary_license"] == "Apache-2.0"
        assert package["risk_level"] == "medium"
        assert package["licenses"] == [
            {
                "spdx_id": "Apache-2.0",
                "name": "Apache License 2.0",
                "category": "permissive",
                "url": "https://spdx.org/licenses/Apache-2.0.html",
            }
        ]
        assert "copyright_statements" not in package

    def test_unknown_package(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test packages without licenses have no primary license."""
        data = json.loads(
            JsonDocumentFormatter().format_document(
                [make_analysis("x", [])], ComplianceDocumentOptions()
            )
        )
        assert data["packages"][0]["licenses"] == []
        assert data["packages"][0]["primary_license"] is None

    def test_grouped_document(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test grouping produces license groups in first-seen order."""
        data = json.loads(
            JsonDocumentFormatter().format_document(
                [
                    make_analysis("a", ["MIT"]),
                    make_analysis("b", ["GPL-3.0-only"]),
                    make_analysis("c", ["MIT"]),
                ],
                ComplianceDocumentOptions(group_by_license=True, include_license_texts=True),
            )
        )

        assert "packages" not in data
        assert [g["license"] for g in data["groups"]] == ["MIT", "GPL-3.0-only"]
        assert [p["name"] for p in data["groups"][0]["packages"]] == ["a", "c"]
        assert data["groups"][0]["license_text"].startswith("MIT License")
        assert data["groups"][1]["license_text"] is None

    def test_optional_fields(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test header, footer and copyright statements appear when set."""
        data = json.loads(
            JsonDocumentFormatter().format_document(
                [make_analysis("a", ["MIT"], copyright_statements=["Copyright 2020 A"])],
                ComplianceDocumentOptions(
                    include_copyright_notices=True,
                    custom_header="Top",
                    custom_footer="Bottom",
                ),
            )
        )
        assert data["header"] == "Top"
        assert data["footer"] == "Bottom"
        assert data["packages"][0]["copyright_statements"] == ["Copyright 2020 A"]
