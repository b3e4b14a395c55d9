"""Locating, reading and validating license-intelligence configuration files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from license_intelligence.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_intelligence.database.store import get_license_store
from license_intelligence.exceptions import ConfigurationError
from license_intelligence.models.config import AnalyzerConfig

logger = logging.getLogger(__name__)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the first of `DEFAULT_CONFIG_NAMES` present in ``start_dir``.

    ``start_dir`` defaults to the current working directory. Parent
    directories are not searched.
    """
    directory = start_dir if start_dir is not None else Path.cwd()
    candidates = (directory / name for name in DEFAULT_CONFIG_NAMES)
    return next((path for path in candidates if path.exists()), None)


def _read_config_data(path: Path) -> dict[str, Any] | None:
    """Parse the YAML mapping held in ``path``.

    Returns None when the file is blank or holds only comments.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content) if content.strip() else None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def _warn_unknown_policy_licenses(config: AnalyzerConfig, path: Path) -> None:
    """Log policy license ids the license store cannot resolve.

    Such ids are legal but can never match a detected license.
    """
    if config.policy is None:
        return
    store = get_license_store()
    policy = config.policy
    listed = (
        policy.prohibited_licenses
        | policy.review_required_licenses
        | policy.allowed_licenses
    )
    for spdx_id in sorted(listed):
        if spdx_id not in store:
            logger.warning(
                "Policy '%s' in %s names unknown license '%s'",
                policy.name,
                path,
                spdx_id,
            )


def load_config_file(path: Path) -> AnalyzerConfig:
    """Load and validate configuration from a YAML file.

    A blank or comment-only file yields the default configuration.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            is not a mapping, or fails model validation.
    """
    data = _read_config_data(path)
    if data is None:
        logger.debug("Configuration file %s is empty, using defaults", path)
        return get_default_config()

    try:
        config = AnalyzerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {format_validation_errors(e)}"
        ) from e

    _warn_unknown_policy_licenses(config, path)
    logger.debug("Loaded configuration from %s", path)
    return config


def format_validation_errors(error: ValidationError) -> str:
    """Flatten pydantic errors into ``loc: msg`` pairs joined by ``; ``.

    Locations are dotted paths such as ``policy.category_rules.0.action``.
    """
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config(config_path: str | None = None) -> AnalyzerConfig:
    """Load the explicit ``config_path``, a discovered file, or the defaults.

    Click has already checked that an explicit path exists.

    Raises:
        ConfigurationError: If the chosen configuration file is invalid.
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None:
        return get_default_config()
    return load_config_file(path)
