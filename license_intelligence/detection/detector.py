"""Multi-strategy license detection for a single package.

Three independent signals are collected and merged:

1. The declared license expression, resolved against the license store.
2. License files under the package root, identified by text fingerprints.
3. Copyright statements found in those same files.
"""
from __future__ import annotations

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from license_intelligence.analysis.risk import assess_license_risk
from license_intelligence.constants import ANALYZER_NAME, ANALYZER_VERSION
from license_intelligence.database.store import LicenseStore, get_license_store
from license_intelligence.detection.files import FileContentProvider, LocalFileProvider
from license_intelligence.detection.patterns import (
    COPYRIGHT_PATTERN,
    LICENSE_FILE_CANDIDATES,
    LICENSE_FINGERPRINTS,
    OBLIGATION_DETAILS,
    normalize_whitespace,
)
from license_intelligence.exceptions import DetectionError
from license_intelligence.models.license import (
    AnalysisMetadata,
    DetectionMethod,
    License,
    LicenseAnalysis,
    LicenseCategory,
    LicenseFileMatch,
    LicenseIssue,
    LicenseObligation,
    ObligationType,
    Package,
    PackageRef,
    ScanOptions,
)

logger = logging.getLogger(__name__)

DECLARED_EXACT_CONFIDENCE = 1.0
DECLARED_PARTIAL_CONFIDENCE = 0.8

_EXPRESSION_OPERATOR = re.compile(r"\s+(?:AND|OR)\s+", re.IGNORECASE)


def resolve_declared_license(
    expression: Optional[str], store: LicenseStore
) -> Optional[License]:
    """Resolve a declared license expression to a single license.

    An exact store hit gets full confidence. Otherwise parentheses are
    dropped, the expression is split on AND/OR, and the first resolvable
    token is returned with reduced confidence.

    Args:
        expression: Declared license expression, e.g. ``"(MIT OR Apache-2.0)"``.
        store: License store to resolve identifiers against.

    Returns:
        The resolved license, or None if nothing in the expression is known.
    """
    if not expression or not expression.strip():
        return None

    expression = expression.strip()
    license_ = store.lookup(expression)
    if license_ is not None:
        return license_.with_confidence(DECLARED_EXACT_CONFIDENCE)

    cleaned = expression.replace("(", "").replace(")", "")
    for token in _EXPRESSION_OPERATOR.split(cleaned):
        token = token.strip()
        if not token:
            continue
        license_ = store.lookup(token)
        if license_ is not None:
            return license_.with_confidence(DECLARED_PARTIAL_CONFIDENCE)

    return None


def match_license_text(content: str, store: LicenseStore) -> Optional[License]:
    """Identify a license from file content using the fingerprint table.

    Args:
        content: Raw file content.
        store: License store providing the canonical record.

    Returns:
        The license of the first matching fingerprint, carrying that
        fingerprint's confidence, or None.
    """
    normalized = normalize_whitespace(content)
    for fingerprint in LICENSE_FINGERPRINTS:
        if fingerprint.pattern.search(normalized):
            license_ = store.lookup(fingerprint.spdx_id)
            if license_ is not None:
                return license_.with_confidence(fingerprint.confidence)
    return None


def extract_copyright_statements(contents: list[str]) -> list[str]:
    """Collect unique copyright statements in encounter order."""
    statements: dict[str, None] = {}
    for content in contents:
        for match in COPYRIGHT_PATTERN.finditer(content):
            statement = match.group(0).strip()
            if statement:
                statements.setdefault(statement, None)
    return list(statements)


def consolidate_licenses(
    declared: Optional[License], license_files: list[LicenseFileMatch]
) -> list[License]:
    """Merge declared and file licenses, unique by SPDX id.

    On collision the license with the higher confidence is kept; the
    position of the first occurrence is preserved.
    """
    merged: dict[str, License] = {}
    if declared is not None:
        merged[declared.spdx_id] = declared

    for match in license_files:
        existing = merged.get(match.license.spdx_id)
        if existing is None or match.confidence > existing.confidence:
            merged[match.license.spdx_id] = match.license

    return list(merged.values())


def select_primary_license(
    licenses: list[License], declared: Optional[License]
) -> Optional[License]:
    """Choose the license that governs the package.

    The declared license wins if it is among the detected ones; then the
    most confident permissive license; then the most confident overall.
    Ties keep the earlier license.
    """
    if not licenses:
        return None

    if declared is not None:
        for license_ in licenses:
            if license_.spdx_id == declared.spdx_id:
                return license_

    permissive = [
        lic for lic in licenses if lic.category == LicenseCategory.PERMISSIVE
    ]
    if permissive:
        return max(permissive, key=lambda lic: lic.confidence)

    return max(licenses, key=lambda lic: lic.confidence)


def calculate_obligations(licenses: list[License]) -> list[LicenseObligation]:
    """Union of obligations across licenses, unique by type, first seen wins."""
    obligations: dict[ObligationType, LicenseObligation] = {}
    for license_ in licenses:
        for obligation_type in license_.obligations:
            if obligation_type not in obligations:
                detail = OBLIGATION_DETAILS[obligation_type]
                obligations[obligation_type] = LicenseObligation(
                    type=obligation_type,
                    description=detail.description,
                    severity=detail.severity,
                    scope=detail.scope,
                )
    return list(obligations.values())


def has_incompatible_licenses(licenses: list[License]) -> bool:
    """Proprietary alongside anything, or more than one strong copyleft."""
    if len(licenses) < 2:
        return False
    categories = [lic.category for lic in licenses]
    if LicenseCategory.PROPRIETARY in categories:
        return True
    return categories.count(LicenseCategory.COPYLEFT) > 1


def detect_issues(
    package: Package, licenses: list[License], declared: Optional[License]
) -> list[LicenseIssue]:
    """Find every applicable issue; checks are independent."""
    issues: list[LicenseIssue] = []

    if not licenses:
        issues.append(
            LicenseIssue(
                type="missing_license",
                severity="error",
                description="No license detected in package",
            )
        )

    if has_incompatible_licenses(licenses):
        spdx_ids = ", ".join(lic.spdx_id for lic in licenses)
        issues.append(
            LicenseIssue(
                type="conflicting_licenses",
                severity="critical",
                description=f"Potentially incompatible licenses: {spdx_ids}",
            )
        )

    for license_ in licenses:
        if license_.deprecated_ids:
            issues.append(
                LicenseIssue(
                    type="deprecated_license",
                    severity="warning",
                    description=f"License {license_.spdx_id} has deprecated identifiers",
                )
            )

    if package.license and declared is None:
        issues.append(
            LicenseIssue(
                type="unrecognized_license",
                severity="warning",
                description=f"Unrecognized license identifier: {package.license}",
            )
        )

    return issues


def determine_detection_method(
    declared: Optional[License], license_files: list[LicenseFileMatch]
) -> DetectionMethod:
    """Classify how the package's licenses were found."""
    if declared is not None and license_files:
        return DetectionMethod.DECLARED
    if license_files:
        return DetectionMethod.FILE_ANALYSIS
    if declared is not None:
        return DetectionMethod.HEURISTIC
    return DetectionMethod.MANUAL


class LicenseDetector:
    """Detects the licenses of a package from its metadata and files.

    Args:
        store: License store. Defaults to the bundled static store.
        files: File content provider. Defaults to the local filesystem.
    """

    def __init__(
        self,
        store: Optional[LicenseStore] = None,
        files: Optional[FileContentProvider] = None,
    ) -> None:
        self._store = store if store is not None else get_license_store()
        self._files = files if files is not None else LocalFileProvider()

    async def detect(
        self, package: Package, options: Optional[ScanOptions] = None
    ) -> LicenseAnalysis:
        """Detect licenses for a package.

        Args:
            package: Package to analyze.
            options: Detection options. Defaults to ``ScanOptions()``.

        Returns:
            LicenseAnalysis for the package. Missing files only reduce the
            evidence available; they never cause a failure.

        Raises:
            DetectionError: If reading files or resolving licenses fails
                unexpectedly.
        """
        options = options or ScanOptions()
        start = time.perf_counter()
        logger.debug("Analyzing license for package %s@%s", package.name, package.version)

        try:
            declared = resolve_declared_license(package.license, self._store)
            file_contents = await asyncio.to_thread(self._read_license_files, package)
            license_files = self._analyze_license_files(file_contents, options)
            copyright_statements = (
                extract_copyright_statements(list(file_contents.values()))
                if options.extract_copyright
                else []
            )
            analysis = self._build_analysis(
                package, declared, license_files, copyright_statements, start
            )
        except DetectionError:
            raise
        except Exception as e:
            logger.error(
                "License detection failed for %s@%s: %s",
                package.name,
                package.version,
                e,
            )
            raise DetectionError(package.name, package.version, str(e)) from e

        logger.info(
            "License analysis of %s@%s completed in %.1fms - found %d license(s)",
            package.name,
            package.version,
            analysis.metadata.scan_duration,
            len(analysis.licenses),
        )
        return analysis

    def _read_license_files(self, package: Package) -> dict[str, str]:
        """Read every existing license candidate file under the package root."""
        contents: dict[str, str] = {}
        if package.path is None:
            return contents

        root = Path(package.path)
        for filename in LICENSE_FILE_CANDIDATES:
            if not self._files.exists(root, filename):
                continue
            content = self._files.read_text(root, filename)
            if content is not None:
                contents[filename] = content
        return contents

    def _analyze_license_files(
        self, file_contents: dict[str, str], options: ScanOptions
    ) -> list[LicenseFileMatch]:
        matches: list[LicenseFileMatch] = []
        for filename, content in file_contents.items():
            license_ = match_license_text(content, self._store)
            if license_ is None:
                continue
            if license_.confidence < options.confidence_threshold:
                logger.debug(
                    "Ignoring %s match in %s below confidence threshold",
                    license_.spdx_id,
                    filename,
                )
                continue
            matches.append(
                LicenseFileMatch(
                    path=filename, license=license_, confidence=license_.confidence
                )
            )
        return matches

    def _build_analysis(
        self,
        package: Package,
        declared: Optional[License],
        license_files: list[LicenseFileMatch],
        copyright_statements: list[str],
        start: float,
    ) -> LicenseAnalysis:
        licenses = consolidate_licenses(declared, license_files)
        obligations = calculate_obligations(licenses)
        scan_duration = (time.perf_counter() - start) * 1000

        return LicenseAnalysis(
            package=PackageRef(name=package.name, version=package.version),
            licenses=licenses,
            primary_license=select_primary_license(licenses, declared),
            detection_method=determine_detection_method(declared, license_files),
            license_files=license_files,
            copyright_statements=copyright_statements,
            obligations=obligations,
            risk_level=assess_license_risk(licenses, obligations),
            issues=detect_issues(package, licenses, declared),
            metadata=AnalysisMetadata(
                analyzed_at=datetime.now(timezone.utc),
                analyzer=ANALYZER_NAME,
                version=ANALYZER_VERSION,
                scan_duration=scan_duration,
            ),
        )

