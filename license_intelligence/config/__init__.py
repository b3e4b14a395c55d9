"""Configuration handling for license-intelligence."""
from __future__ import annotations

from license_intelligence.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_intelligence.config.loader import (
    find_config_file,
    format_validation_errors,
    load_config,
    load_config_file,
)
from license_intelligence.models.config import AnalyzerConfig

__all__ = [
    "AnalyzerConfig",
    "DEFAULT_CONFIG_NAMES",
    "find_config_file",
    "format_validation_errors",
    "get_default_config",
    "load_config",
    "load_config_file",
]
