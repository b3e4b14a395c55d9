"""Default configuration values for license-intelligence."""

from __future__ import annotations

from license_intelligence.models.config import AnalyzerConfig

# Configuration file names searched for, in order
DEFAULT_CONFIG_NAMES = [".license-intelligence.yaml", ".license-intelligence.yml"]


def get_default_config() -> AnalyzerConfig:
    """Get the default configuration.

    Returns:
        AnalyzerConfig with no project name, no ignored packages and no policy.
    """
    return AnalyzerConfig()
