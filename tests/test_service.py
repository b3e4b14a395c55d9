"""Tests for the license intelligence service."""

import asyncio
import json
import logging
from io import StringIO
from typing import Callable, Optional

import pytest
from rich.console import Console

from license_intelligence.detection.detector import LicenseDetector
from license_intelligence.exceptions import DetectionError, UnsupportedFormatError
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    Package,
    RiskLevel,
    ScanOptions,
)
from license_intelligence.models.policy import LicensePolicy, RiskTolerance
from license_intelligence.models.risk import ProjectIdentity
from license_intelligence.service import LicenseIntelligenceService


class FakeDetector:
    """Detector returning canned analyses and recording call order."""

    def __init__(
        self,
        make_analysis: Callable[..., LicenseAnalysis],
        licenses: Optional[dict[str, list[str]]] = None,
        failing: frozenset[str] = frozenset(),
    ) -> None:
        self._make_analysis = make_analysis
        self._licenses = licenses or {}
        self._failing = failing
        self.events: list[tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def detect(
        self, package: Package, options: Optional[ScanOptions] = None
    ) -> LicenseAnalysis:
        self.events.append(("start", package.name))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(0)
            if package.name in self._failing:
                raise DetectionError(package.name, package.version, "boom")
            return self._make_analysis(
                package.name,
                self._licenses.get(package.name, ["MIT"]),
                version=package.version,
            )
        finally:
            self.active -= 1
            self.events.append(("end", package.name))


def _packages(count: int) -> list[Package]:
    return [Package(name=f"pkg{i:02d}", version="1.0.0") for i in range(count)]


class TestAnalyzeLicenses:
    """Tests for batched license analysis."""

    @pytest.mark.asyncio
    async def test_failure_is_skipped(
        self,
        make_analysis: Callable[..., LicenseAnalysis],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test one failing package leaves N-1 analyses in input order."""
        caplog.set_level(logging.INFO, logger="license_intelligence")
        detector = FakeDetector(make_analysis, failing=frozenset({"pkg03"}))
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]

        analyses = await service.analyze_licenses(_packages(6))

        assert [a.package.name for a in analyses] == [
            "pkg00",
            "pkg01",
            "pkg02",
            "pkg04",
            "pkg05",
        ]
        assert "Failed to analyze pkg03@1.0.0" in caplog.text
        assert "5/6 successful, 1 failed" in caplog.text

    @pytest.mark.asyncio
    async def test_batches_of_ten(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test at most ten detections run at once and batches do not overlap."""
        detector = FakeDetector(make_analysis)
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]

        analyses = await service.analyze_licenses(_packages(25))

        assert len(analyses) == 25
        assert detector.max_active == 10
        first_batch_done = max(
            detector.events.index(("end", f"pkg{i:02d}")) for i in range(10)
        )
        assert detector.events.index(("start", "pkg10")) > first_batch_done

    @pytest.mark.asyncio
    async def test_empty(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test no packages yields no analyses."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        assert await service.analyze_licenses([]) == []

    @pytest.mark.asyncio
    async def test_with_progress_console(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test a console-backed service still returns every analysis."""
        console = Console(file=StringIO(), force_terminal=True, width=120)
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis),  # type: ignore[arg-type]
            console=console,
        )
        assert len(await service.analyze_licenses(_packages(12))) == 12

    @pytest.mark.asyncio
    async def test_real_detector(self, sample_packages: list[Package]) -> None:
        """Test batch analysis over packages on disk."""
        service = LicenseIntelligenceService(detector=LicenseDetector())
        analyses = await service.analyze_licenses(sample_packages)

        by_name = {a.package.name: a for a in analyses}
        assert [lic.spdx_id for lic in by_name["alpha"].licenses] == ["MIT"]
        assert by_name["alpha"].copyright_statements == ["Copyright (c) 2020 Alpha Devs"]
        assert [lic.spdx_id for lic in by_name["beta"].licenses] == ["Apache-2.0"]
        assert by_name["gamma"].licenses == []


class TestAnalyzeLicense:
    """Tests for single-package analysis."""

    @pytest.mark.asyncio
    async def test_failure_propagates(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test a single failing package raises DetectionError."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis, failing=frozenset({"bad"}))  # type: ignore[arg-type]
        )
        with pytest.raises(DetectionError):
            await service.analyze_license(Package(name="bad", version="1"))


class TestCompatibility:
    """Tests for compatibility operations."""

    def test_check_compatibility(self, make_license: Callable[..., License]) -> None:
        """Test pairwise checks delegate to the engine."""
        service = LicenseIntelligenceService()
        result = service.check_compatibility(
            make_license("GPL-2.0-only"), make_license("GPL-3.0-only")
        )
        assert result.compatible is False

    @pytest.mark.asyncio
    async def test_generate_compatibility_report(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test the report covers all submitted packages."""
        detector = FakeDetector(
            make_analysis,
            licenses={"pkg00": ["GPL-2.0-only"], "pkg01": ["GPL-3.0-only"]},
        )
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]
        report = await service.generate_compatibility_report(_packages(3))

        assert report.summary.total_packages == 3
        assert report.overall_compatibility == "incompatible"


class TestAssessLegalRisk:
    """Tests for legal risk assessment."""

    @pytest.mark.asyncio
    async def test_project_defaults_to_first_package(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test the first package identifies the project by default."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        report = await service.assess_legal_risk(
            [Package(name="webapp", version="3.1.0"), Package(name="lib", version="1")]
        )
        assert report.project.name == "webapp"
        assert report.project.version == "3.1.0"
        assert report.overall_risk == RiskLevel.VERY_LOW

    @pytest.mark.asyncio
    async def test_unknown_project(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test an empty package list is an unknown project with zero risk."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        report = await service.assess_legal_risk([])
        assert report.project.name == "Unknown Project"
        assert report.risk_score == 0

    @pytest.mark.asyncio
    async def test_explicit_project(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test an explicit project identity is kept."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        report = await service.assess_legal_risk(
            _packages(2), project=ProjectIdentity(name="platform")
        )
        assert report.project.name == "platform"
        assert report.project.version is None


class TestValidatePolicy:
    """Tests for policy validation."""

    @pytest.mark.asyncio
    async def test_non_compliant(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test a prohibited critical-risk license yields both violations."""
        detector = FakeDetector(make_analysis, licenses={"pkg01": ["SSPL-1.0"]})
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]
        result = await service.validate_policy(
            _packages(2), LicensePolicy(name="p", prohibited_licenses={"SSPL-1.0"})
        )
        assert result.compliant is False
        assert [(v.package, v.license, v.severity) for v in result.violations] == [
            ("pkg01", "SSPL-1.0", "critical"),
            ("pkg01", "SSPL-1.0", "critical"),
        ]
        assert [v.violation for v in result.violations] == [
            "License is explicitly prohibited",
            "License risk level exceeds policy tolerance",
        ]

    @pytest.mark.asyncio
    async def test_critical_tolerance_leaves_only_prohibition(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test a CRITICAL tolerance suppresses the risk violation."""
        detector = FakeDetector(make_analysis, licenses={"pkg01": ["SSPL-1.0"]})
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]
        policy = LicensePolicy(
            name="p",
            prohibited_licenses={"SSPL-1.0"},
            risk_tolerance=RiskTolerance(maximum_risk_level=RiskLevel.CRITICAL),
        )
        result = await service.validate_policy(_packages(2), policy)
        assert [(v.package, v.severity) for v in result.violations] == [
            ("pkg01", "critical")
        ]

    @pytest.mark.asyncio
    async def test_compliant(self, make_analysis: Callable[..., LicenseAnalysis]) -> None:
        """Test no violations means compliant."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        result = await service.validate_policy(_packages(2), LicensePolicy(name="p"))
        assert result.compliant is True
        assert result.violations == []


class TestGenerateComplianceDocument:
    """Tests for compliance document generation."""

    @pytest.mark.asyncio
    async def test_renders_requested_format(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test the document is rendered in the requested format."""
        service = LicenseIntelligenceService(
            detector=FakeDetector(make_analysis)  # type: ignore[arg-type]
        )
        output = await service.generate_compliance_document(
            _packages(2), ComplianceDocumentOptions(format="json")
        )
        data = json.loads(output)
        assert [p["name"] for p in data["packages"]] == ["pkg00", "pkg01"]

    @pytest.mark.asyncio
    async def test_unsupported_format_before_detection(
        self, make_analysis: Callable[..., LicenseAnalysis]
    ) -> None:
        """Test an unsupported format fails before any package is analyzed."""
        detector = FakeDetector(make_analysis)
        service = LicenseIntelligenceService(detector=detector)  # type: ignore[arg-type]

        with pytest.raises(UnsupportedFormatError):
            await service.generate_compliance_document(
                _packages(3), ComplianceDocumentOptions(format="pdf")
            )
        assert detector.events == []

    @pytest.mark.asyncio
    async def test_from_disk(self, sample_packages: list[Package]) -> None:
        """Test a grouped text document over packages on disk."""
        service = LicenseIntelligenceService()
        output = await service.generate_compliance_document(
            sample_packages,
            ComplianceDocumentOptions(group_by_license=True, include_copyright_notices=True),
        )
        assert "LICENSE: MIT" in output
        assert "    Copyright (c) 2020 Alpha Devs" in output
        assert "LICENSE: Unknown" in output
