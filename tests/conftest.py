"""Shared fixtures for license-intelligence tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest
from click.testing import CliRunner

from license_intelligence.analysis.risk import assess_license_risk
from license_intelligence.database.store import StaticLicenseStore
from license_intelligence.detection.detector import (
    calculate_obligations,
    select_primary_license,
)
from license_intelligence.models.license import (
    AnalysisMetadata,
    DetectionMethod,
    License,
    LicenseAnalysis,
    Package,
    PackageRef,
    RiskLevel,
)

MIT_TEXT = """MIT License

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.
"""

APACHE_TEXT = """
                                 Apache License
                           Version 2.0, January 2004
                        http://www.apache.org/licenses/
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> StaticLicenseStore:
    """Provide a license store over the bundled license table."""
    return StaticLicenseStore()


@pytest.fixture
def make_license(store: StaticLicenseStore) -> Callable[..., License]:
    """Provide a factory for canonical licenses from the store."""

    def _make(spdx_id: str, confidence: float = 1.0) -> License:
        license_ = store.lookup(spdx_id)
        assert license_ is not None, f"{spdx_id} missing from store"
        return license_.with_confidence(confidence)

    return _make


@pytest.fixture
def make_analysis(
    make_license: Callable[..., License],
) -> Callable[..., LicenseAnalysis]:
    """Provide a factory for LicenseAnalysis objects.

    Obligations and risk level are derived from the licenses the same way
    the detector derives them unless ``risk_level`` is given.
    """

    def _make(
        name: str,
        spdx_ids: Optional[list[str]] = None,
        version: str = "1.0.0",
        risk_level: Optional[RiskLevel] = None,
        copyright_statements: Optional[list[str]] = None,
    ) -> LicenseAnalysis:
        licenses = [make_license(spdx_id) for spdx_id in spdx_ids or []]
        obligations = calculate_obligations(licenses)
        return LicenseAnalysis(
            package=PackageRef(name=name, version=version),
            licenses=licenses,
            primary_license=select_primary_license(licenses, None),
            detection_method=(
                DetectionMethod.HEURISTIC if licenses else DetectionMethod.MANUAL
            ),
            copyright_statements=copyright_statements or [],
            obligations=obligations,
            risk_level=(
                risk_level
                if risk_level is not None
                else assess_license_risk(licenses, obligations)
            ),
            metadata=AnalysisMetadata(
                analyzed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                analyzer="LicenseDetector",
                version="1.0.0",
                scan_duration=1.0,
            ),
        )

    return _make


@pytest.fixture
def package_dir(tmp_path: Path) -> Callable[..., Path]:
    """Provide a factory creating a package directory with given files."""

    def _make(name: str, files: dict[str, str]) -> Path:
        root = tmp_path / name
        root.mkdir()
        for filename, content in files.items():
            (root / filename).write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_packages(package_dir: Callable[..., Path]) -> list[Package]:
    """Provide packages with on-disk license files."""
    return [
        Package(
            name="alpha",
            version="1.0.0",
            license="MIT",
            path=package_dir("alpha", {"LICENSE": "Copyright (c) 2020 Alpha Devs\n\n" + MIT_TEXT}),
        ),
        Package(
            name="beta",
            version="2.1.0",
            license="Apache-2.0",
            path=package_dir("beta", {"LICENSE": APACHE_TEXT}),
        ),
        Package(name="gamma", version="0.3.0"),
    ]
