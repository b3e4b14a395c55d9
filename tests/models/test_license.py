"""Tests for license Pydantic models."""

from pathlib import Path
from typing import Callable

import pytest
from pydantic import ValidationError

from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    LicenseCategory,
    ObligationType,
    Package,
    RiskLevel,
    ScanOptions,
)


class TestPackage:
    """Tests for Package model."""

    def test_required_fields(self) -> None:
        """Test that name and version are required."""
        pkg = Package(name="click", version="8.1.0")
        assert pkg.name == "click"
        assert pkg.license is None
        assert pkg.path is None

    def test_path_is_coerced(self) -> None:
        """Test that a string path becomes a Path."""
        pkg = Package(name="click", version="8.1.0", path="/tmp/click")
        assert pkg.path == Path("/tmp/click")

    def test_is_frozen(self) -> None:
        """Test that packages cannot be modified."""
        pkg = Package(name="click", version="8.1.0")
        with pytest.raises(ValidationError):
            pkg.name = "other"  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are rejected."""
        with pytest.raises(ValidationError):
            Package(name="click", version="8.1.0", homepage="x")  # type: ignore[call-arg]


class TestLicense:
    """Tests for License model."""

    def test_with_confidence_returns_copy(self) -> None:
        """Test with_confidence leaves the original untouched."""
        original = License(spdx_id="MIT", name="MIT License", category="permissive")
        adjusted = original.with_confidence(0.8)
        assert adjusted.confidence == 0.8
        assert original.confidence == 1.0

    def test_confidence_bounds(self) -> None:
        """Test confidence must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            License(spdx_id="MIT", name="MIT", category="permissive", confidence=1.5)

    def test_unknown_category_rejected(self) -> None:
        """Test that categories outside the enum are rejected."""
        with pytest.raises(ValidationError):
            License(spdx_id="X", name="X", category="weird")


class TestRiskLevel:
    """Tests for RiskLevel ordering."""

    def test_levels_are_ordered(self) -> None:
        """Test VERY_LOW < LOW < ... < CRITICAL."""
        levels = list(RiskLevel)
        assert levels == sorted(levels)
        assert RiskLevel.VERY_LOW < RiskLevel.CRITICAL
        assert RiskLevel.HIGH >= RiskLevel.MEDIUM

    def test_rank(self) -> None:
        """Test rank reflects position."""
        assert RiskLevel.VERY_LOW.rank == 0
        assert RiskLevel.CRITICAL.rank == 5


class TestLicenseAnalysis:
    """Tests for LicenseAnalysis helpers."""

    def test_has_license(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test has_license reflects detected licenses."""
        assert make_analysis("a", ["MIT"]).has_license is True
        assert make_analysis("b", []).has_license is False

    def test_has_category(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test has_category matches any detected license."""
        analysis = make_analysis("a", ["MIT", "GPL-3.0-only"])
        assert analysis.has_category(LicenseCategory.COPYLEFT)
        assert not analysis.has_category(LicenseCategory.PROPRIETARY)

    def test_has_obligation(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test has_obligation looks at aggregated obligations."""
        analysis = make_analysis("a", ["Apache-2.0"])
        assert analysis.has_obligation(ObligationType.PATENT_GRANT)
        assert not analysis.has_obligation(ObligationType.DISCLOSE_SOURCE)

    def test_json_round_trip(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test an analysis survives JSON serialization."""
        analysis = make_analysis("a", ["MIT"], copyright_statements=["Copyright 2020 A"])
        restored = LicenseAnalysis.model_validate_json(analysis.model_dump_json())
        assert restored == analysis


class TestScanOptions:
    """Tests for ScanOptions model."""

    def test_defaults(self) -> None:
        """Test defaults keep every match and extract copyright."""
        options = ScanOptions()
        assert options.confidence_threshold == 0.0
        assert options.extract_copyright is True

    def test_threshold_bounds(self) -> None:
        """Test threshold must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            ScanOptions(confidence_threshold=2.0)
