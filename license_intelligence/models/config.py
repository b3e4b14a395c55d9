"""Configuration Pydantic models for license-intelligence."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from license_intelligence.models.policy import LicensePolicy


class AnalyzerConfig(BaseModel):
    """Configuration for license-intelligence.

    All fields are optional with None defaults to allow partial configuration.
    """

    model_config = {"extra": "forbid"}

    project_name: Optional[str] = Field(
        default=None,
        description="Project name used in legal risk reports. "
        "Defaults to the first analyzed package.",
    )
    ignored_packages: Optional[List[str]] = Field(
        default=None,
        description="List of package names to skip during scanning.",
    )
    policy: Optional[LicensePolicy] = Field(
        default=None,
        description="License policy used by the policy command.",
    )
