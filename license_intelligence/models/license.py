"""License and per-package analysis models.

Provides the data structures produced by license detection: the canonical
license record, obligations, issues, and the per-package ``LicenseAnalysis``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class LicenseCategory(str, Enum):
    """Categories of licenses by restriction level."""

    PERMISSIVE = "permissive"
    WEAK_COPYLEFT = "weak_copyleft"
    COPYLEFT = "copyleft"
    PROPRIETARY = "proprietary"
    CUSTOM = "custom"
    UNKNOWN = "unknown"
    PUBLIC_DOMAIN = "public_domain"


class ObligationType(str, Enum):
    """Legally binding consequences of using a license."""

    ATTRIBUTION = "attribution"
    COPYLEFT = "copyleft"
    DISCLOSE_SOURCE = "disclose_source"
    SAME_LICENSE = "same_license"
    PATENT_GRANT = "patent_grant"
    NO_COMMERCIAL_USE = "no_commercial_use"
    SHARE_ALIKE = "share_alike"
    NOTICE_PRESERVATION = "notice_preservation"


class DetectionMethod(str, Enum):
    """How the licenses of a package were determined."""

    DECLARED = "declared"
    FILE_ANALYSIS = "file_analysis"
    HEURISTIC = "heuristic"
    MANUAL = "manual"


class RiskLevel(str, Enum):
    """Ordinal legal risk tiers.

    Members compare by severity rather than by their string value, so
    ``RiskLevel.LOW < RiskLevel.CRITICAL`` holds.
    """

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Position of this level in the severity order (0 = VERY_LOW)."""
        return list(RiskLevel).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


Severity = Literal["low", "medium", "high", "critical"]
IssueType = Literal[
    "missing_license",
    "conflicting_licenses",
    "deprecated_license",
    "unrecognized_license",
]
IssueSeverity = Literal["warning", "error", "critical"]


class Package(BaseModel):
    """A software package to analyze.

    ``license`` is the declared license expression (e.g. from package
    metadata) and ``path`` the directory holding the package's files.
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str = Field(description="Package name")
    version: str = Field(description="Package version")
    license: Optional[str] = Field(
        default=None, description="Declared license expression"
    )
    path: Optional[Path] = Field(
        default=None, description="Filesystem root of the package"
    )


class PackageRef(BaseModel):
    """Identity of the package an analysis belongs to."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="Package name")
    version: str = Field(description="Package version")


class License(BaseModel):
    """Canonical license record from the license store.

    Detections attach their own ``confidence`` through ``model_copy`` and
    never modify the store's record.
    """

    model_config = {"extra": "forbid"}

    spdx_id: str = Field(description="SPDX license identifier")
    name: str = Field(description="Human-readable license name")
    category: LicenseCategory = Field(description="License category")
    obligations: list[ObligationType] = Field(
        default_factory=list, description="Obligations imposed by the license"
    )
    confidence: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Detection confidence"
    )
    deprecated_ids: list[str] = Field(
        default_factory=list, description="Deprecated SPDX identifiers"
    )
    full_text: Optional[str] = Field(default=None, description="Full license text")
    url: Optional[str] = Field(default=None, description="Reference URL")

    def with_confidence(self, confidence: float) -> License:
        """Return a copy of this license carrying the given confidence."""
        return self.model_copy(update={"confidence": confidence})


class LicenseObligation(BaseModel):
    """An obligation with its static detail record."""

    model_config = {"extra": "forbid"}

    type: ObligationType = Field(description="Obligation type")
    description: str = Field(description="What the obligation requires")
    severity: Severity = Field(description="Obligation severity")
    scope: str = Field(description="Where the obligation applies")


class LicenseFileMatch(BaseModel):
    """A license file whose text matched a known license fingerprint."""

    model_config = {"extra": "forbid"}

    path: str = Field(description="File name relative to the package root")
    license: License = Field(description="License identified in the file")
    confidence: float = Field(ge=0.0, le=1.0, description="Fingerprint confidence")


class LicenseIssue(BaseModel):
    """A problem found while analyzing a package's licenses."""

    model_config = {"extra": "forbid"}

    type: IssueType = Field(description="Issue type")
    severity: IssueSeverity = Field(description="Issue severity")
    description: str = Field(description="Human-readable description")
    file: Optional[str] = Field(default=None, description="Related file, if any")


class AnalysisMetadata(BaseModel):
    """Bookkeeping for a single analysis run."""

    model_config = {"extra": "forbid"}

    analyzed_at: datetime = Field(description="When the analysis finished (UTC)")
    analyzer: str = Field(description="Analyzer name")
    version: str = Field(description="Analyzer version")
    scan_duration: float = Field(ge=0, description="Duration in milliseconds")


class LicenseAnalysis(BaseModel):
    """License detection result for a single package."""

    model_config = {"extra": "forbid"}

    package: PackageRef = Field(description="Analyzed package")
    licenses: list[License] = Field(
        default_factory=list, description="Detected licenses, unique by SPDX id"
    )
    primary_license: Optional[License] = Field(
        default=None, description="License considered governing for the package"
    )
    detection_method: DetectionMethod = Field(description="How licenses were found")
    license_files: list[LicenseFileMatch] = Field(
        default_factory=list, description="License files that matched a fingerprint"
    )
    copyright_statements: list[str] = Field(
        default_factory=list, description="Unique copyright statements"
    )
    obligations: list[LicenseObligation] = Field(
        default_factory=list, description="Obligations, unique by type"
    )
    risk_level: RiskLevel = Field(description="Per-package legal risk")
    issues: list[LicenseIssue] = Field(
        default_factory=list, description="Detected issues"
    )
    metadata: AnalysisMetadata = Field(description="Analysis metadata")

    @property
    def has_license(self) -> bool:
        """True if at least one license was detected."""
        return len(self.licenses) > 0

    def has_category(self, category: LicenseCategory) -> bool:
        """Check whether any detected license belongs to ``category``."""
        return any(lic.category == category for lic in self.licenses)

    def has_obligation(self, obligation: ObligationType) -> bool:
        """Check whether any aggregated obligation has the given type."""
        return any(ob.type == obligation for ob in self.obligations)


class ScanOptions(BaseModel):
    """Options for license detection."""

    model_config = {"extra": "forbid"}

    confidence_threshold: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="License file matches below this confidence are discarded",
    )
    extract_copyright: bool = Field(
        default=True, description="Collect copyright statements from license files"
    )
