"""Policy-related Pydantic models for license-intelligence."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from license_intelligence.models.license import LicenseCategory, RiskLevel

PolicyAction = Literal["allow", "review", "prohibit"]
ViolationSeverity = Literal["warning", "error", "critical"]


class CategoryRule(BaseModel):
    """Action to take for every license of a category."""

    model_config = {"extra": "forbid"}

    category: LicenseCategory = Field(description="License category")
    action: PolicyAction = Field(description="What to do with the category")


class RiskTolerance(BaseModel):
    """Highest per-package risk level the policy accepts."""

    model_config = {"extra": "forbid"}

    maximum_risk_level: RiskLevel = Field(
        default=RiskLevel.HIGH, description="Maximum accepted risk level"
    )


class LicensePolicy(BaseModel):
    """An organization's license policy.

    Supplied wholesale by the caller, typically from the ``policy`` key of
    the configuration file.
    """

    model_config = {"extra": "forbid"}

    name: str = Field(description="Policy name")
    prohibited_licenses: set[str] = Field(
        default_factory=set, description="SPDX ids that may never be used"
    )
    review_required_licenses: set[str] = Field(
        default_factory=set, description="SPDX ids that need legal review"
    )
    allowed_licenses: set[str] = Field(
        default_factory=set, description="SPDX ids explicitly approved"
    )
    category_rules: list[CategoryRule] = Field(
        default_factory=list, description="Per-category rules, first match wins"
    )
    risk_tolerance: RiskTolerance = Field(
        default_factory=RiskTolerance, description="Accepted risk"
    )


class PolicyViolation(BaseModel):
    """A license policy violation for a package."""

    model_config = {"extra": "forbid"}

    package: str = Field(description="Name of the package with violation")
    license: str = Field(description="SPDX id of the offending license")
    violation: str = Field(description="Why this is a violation")
    severity: ViolationSeverity = Field(description="Violation severity")


class PolicyValidationResult(BaseModel):
    """Outcome of validating packages against a policy."""

    model_config = {"extra": "forbid"}

    compliant: bool = Field(description="True when there are no violations")
    violations: list[PolicyViolation] = Field(
        default_factory=list, description="Violations in evaluation order"
    )
