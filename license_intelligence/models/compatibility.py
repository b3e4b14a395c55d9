"""License compatibility models for license-intelligence."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CompatibilityStatus(Enum):
    """Status of license compatibility check."""

    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"


OverallCompatibility = Literal["compatible", "review_required", "incompatible"]


class CompatibilityResult(BaseModel):
    """Result of a license compatibility check between two licenses."""

    license_a: str = Field(description="First license identifier")
    license_b: str = Field(description="Second license identifier")
    status: CompatibilityStatus = Field(description="Compatibility status")
    reason: str = Field(description="Explanation of compatibility determination")

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def compatible(self) -> bool:
        """True if licenses are compatible."""
        return self.status == CompatibilityStatus.COMPATIBLE


class LicenseConflict(BaseModel):
    """A pair of licenses used together in a project that cannot be combined."""

    license_a: str = Field(description="First license identifier")
    license_b: str = Field(description="Second license identifier")
    reason: str = Field(description="Why the licenses conflict")
    packages: list[str] = Field(
        default_factory=list,
        description="Packages carrying either license",
    )

    model_config = {"extra": "forbid"}


class CompatibilitySummary(BaseModel):
    """Aggregate numbers of a compatibility report."""

    total_packages: int = Field(ge=0, description="Packages analyzed")
    total_licenses: int = Field(ge=0, description="Unique licenses found")
    conflict_count: int = Field(ge=0, description="Incompatible license pairs")
    unknown_count: int = Field(ge=0, description="Pairs of unclear compatibility")
    risk_score: int = Field(ge=0, le=100, description="Compatibility risk (0-100)")

    model_config = {"extra": "forbid"}


class CompatibilityReport(BaseModel):
    """Project-wide license compatibility report."""

    conflicts: list[LicenseConflict] = Field(
        default_factory=list, description="Incompatible license pairs"
    )
    warnings: list[CompatibilityResult] = Field(
        default_factory=list, description="Pairs whose compatibility is unknown"
    )
    overall_compatibility: OverallCompatibility = Field(
        description="Project-wide verdict"
    )
    summary: CompatibilitySummary = Field(description="Report summary")

    model_config = {"extra": "forbid"}

    @property
    def has_conflicts(self) -> bool:
        """True if at least one conflict was found."""
        return len(self.conflicts) > 0
