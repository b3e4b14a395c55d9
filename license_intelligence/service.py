"""License intelligence service.

Orchestrates batched license detection across many packages and turns the
resulting analyses into compatibility reports, legal risk reports, policy
validation results and compliance documents.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import NamedTuple, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from license_intelligence.analysis.compatibility import CompatibilityEngine
from license_intelligence.analysis.legal_risk import build_legal_risk_report
from license_intelligence.analysis.policy import evaluate_policy
from license_intelligence.constants import BATCH_SIZE
from license_intelligence.detection.detector import LicenseDetector
from license_intelligence.models.compatibility import (
    CompatibilityReport,
    CompatibilityResult,
)
from license_intelligence.models.document import ComplianceDocumentOptions
from license_intelligence.models.license import (
    License,
    LicenseAnalysis,
    Package,
    ScanOptions,
)
from license_intelligence.models.policy import LicensePolicy, PolicyValidationResult
from license_intelligence.models.risk import LegalRiskReport, ProjectIdentity
from license_intelligence.output.documents import (
    DOCUMENT_FORMATTERS,
    resolve_document_format,
)

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "Unknown Project"


class DetectionOutcome(NamedTuple):
    """Settled result of one detection within a batch.

    Attributes:
        package: The package that was analyzed.
        analysis: The analysis, or None if detection failed.
        error: The failure, or None if detection succeeded.
    """

    package: Package
    analysis: Optional[LicenseAnalysis] = None
    error: Optional[Exception] = None


class LicenseIntelligenceService:
    """Project-level license intelligence built on per-package detection.

    Args:
        detector: Per-package license detector. Defaults to a detector over
            the bundled license store and the local filesystem.
        compatibility_engine: Engine used for compatibility checks.
        console: Optional Rich Console. When given, batch analysis shows a
            transient progress bar on it.
    """

    def __init__(
        self,
        detector: Optional[LicenseDetector] = None,
        compatibility_engine: Optional[CompatibilityEngine] = None,
        console: Optional[Console] = None,
    ) -> None:
        self._detector = detector if detector is not None else LicenseDetector()
        self._compatibility = (
            compatibility_engine
            if compatibility_engine is not None
            else CompatibilityEngine()
        )
        self._console = console

    async def analyze_license(
        self, package: Package, options: Optional[ScanOptions] = None
    ) -> LicenseAnalysis:
        """Analyze the license of a single package.

        Raises:
            DetectionError: If detection fails.
        """
        try:
            return await self._detector.detect(package, options)
        except Exception as e:
            logger.error("License analysis failed for %s: %s", package.name, e)
            raise

    async def analyze_licenses(
        self, packages: list[Package], options: Optional[ScanOptions] = None
    ) -> list[LicenseAnalysis]:
        """Analyze licenses for many packages in fixed-size batches.

        Packages in a batch are detected concurrently and the whole batch
        settles before the next one starts. A failing package is logged and
        left out of the result; it never fails the call.

        Args:
            packages: Packages to analyze.
            options: Detection options shared by every package.

        Returns:
            Successful analyses in input order. Shorter than ``packages``
            when some detections failed.
        """
        start = time.perf_counter()
        logger.info("Analyzing licenses for %d packages", len(packages))

        outcomes: list[DetectionOutcome] = []
        if self._console is not None and packages:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=self._console,
                transient=True,
            ) as progress:
                task_id = progress.add_task(
                    f"Analyzing licenses for {len(packages)} packages...",
                    total=len(packages),
                )
                for batch in _batches(packages, BATCH_SIZE):
                    settled = await self._run_batch(batch, options)
                    outcomes.extend(settled)
                    progress.advance(task_id, len(settled))
        else:
            for batch in _batches(packages, BATCH_SIZE):
                outcomes.extend(await self._run_batch(batch, options))

        analyses: list[LicenseAnalysis] = []
        failures = 0
        for outcome in outcomes:
            if outcome.analysis is not None:
                analyses.append(outcome.analysis)
            else:
                failures += 1
                logger.warning(
                    "Failed to analyze %s@%s: %s",
                    outcome.package.name,
                    outcome.package.version,
                    outcome.error,
                )

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "License analysis completed in %.0fms - %d/%d successful, %d failed",
            elapsed,
            len(analyses),
            len(packages),
            failures,
        )
        return analyses

    async def _run_batch(
        self, batch: list[Package], options: Optional[ScanOptions]
    ) -> list[DetectionOutcome]:
        results = await asyncio.gather(
            *(self._detector.detect(pkg, options) for pkg in batch),
            return_exceptions=True,
        )

        outcomes: list[DetectionOutcome] = []
        for pkg, result in zip(batch, results):
            if isinstance(result, LicenseAnalysis):
                outcomes.append(DetectionOutcome(package=pkg, analysis=result))
            elif isinstance(result, Exception):
                outcomes.append(DetectionOutcome(package=pkg, error=result))
            else:
                # CancelledError, KeyboardInterrupt and the like
                raise result
        return outcomes

    def check_compatibility(
        self, license_a: License, license_b: License
    ) -> CompatibilityResult:
        """Check whether two licenses can be combined."""
        return self._compatibility.check_pair(license_a, license_b)

    async def generate_compatibility_report(
        self, packages: list[Package], options: Optional[ScanOptions] = None
    ) -> CompatibilityReport:
        """Analyze packages and report license compatibility across them."""
        analyses = await self.analyze_licenses(packages, options)
        return self._compatibility.report(packages, analyses, options)

    async def assess_legal_risk(
        self,
        packages: list[Package],
        options: Optional[ScanOptions] = None,
        project: Optional[ProjectIdentity] = None,
    ) -> LegalRiskReport:
        """Assess the legal risk of a project made of ``packages``.

        Args:
            packages: Packages making up the project.
            options: Detection options.
            project: Project identity. Defaults to the first package, or
                ``Unknown Project`` when there are no packages.

        Returns:
            LegalRiskReport for the project.
        """
        start = time.perf_counter()
        logger.info("Assessing legal risk for %d packages", len(packages))

        analyses = await self.analyze_licenses(packages, options)
        compatibility_report = self._compatibility.report(packages, analyses, options)

        if project is None:
            project = (
                ProjectIdentity(name=packages[0].name, version=packages[0].version)
                if packages
                else ProjectIdentity(name=UNKNOWN_PROJECT)
            )

        report = build_legal_risk_report(project, analyses, compatibility_report)
        logger.info(
            "Legal risk assessment completed in %.0fms - overall risk: %s (%d/100)",
            (time.perf_counter() - start) * 1000,
            report.overall_risk.value,
            report.risk_score,
        )
        return report

    async def validate_policy(
        self,
        packages: list[Package],
        policy: LicensePolicy,
        options: Optional[ScanOptions] = None,
    ) -> PolicyValidationResult:
        """Validate packages against a license policy.

        Args:
            packages: Packages to validate.
            policy: Policy supplied by the caller.
            options: Detection options.

        Returns:
            PolicyValidationResult; compliant when there are no violations.
        """
        analyses = await self.analyze_licenses(packages, options)
        violations = evaluate_policy(analyses, policy)
        logger.info(
            "Policy '%s' validation: %d violation(s)", policy.name, len(violations)
        )
        return PolicyValidationResult(compliant=not violations, violations=violations)

    async def generate_compliance_document(
        self,
        packages: list[Package],
        options: ComplianceDocumentOptions,
        scan_options: Optional[ScanOptions] = None,
    ) -> str:
        """Analyze packages and render a compliance document.

        Args:
            packages: Packages to document.
            options: Document options.
            scan_options: Detection options.

        Returns:
            The rendered document.

        Raises:
            UnsupportedFormatError: If ``options.format`` is not supported.
                Raised before any package is analyzed.
        """
        document_format = resolve_document_format(options.format)
        logger.info(
            "Generating %s compliance document for %d packages",
            document_format.value,
            len(packages),
        )

        analyses = await self.analyze_licenses(packages, scan_options)
        return DOCUMENT_FORMATTERS[document_format].format_document(analyses, options)


def _batches(items: list[Package], size: int) -> list[list[Package]]:
    return [items[i : i + size] for i in range(0, len(items), size)]
