"""Scanner module for package discovery.

Packages come from either the running Python environment or a manifest
file listing them explicitly.
"""
import json
import logging
from importlib.metadata import Distribution, distributions
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from license_intelligence.config.loader import format_validation_errors
from license_intelligence.detection.patterns import LICENSE_FILE_CANDIDATES
from license_intelligence.exceptions import ConfigurationError, ScanError
from license_intelligence.models.license import Package

logger = logging.getLogger(__name__)


def _declared_license(dist: Distribution) -> Optional[str]:
    """License-Expression metadata, falling back to the legacy License field."""
    for field in ("License-Expression", "License"):
        value = dist.metadata.get(field)
        if value and value.strip() and value.strip().upper() != "UNKNOWN":
            return value.strip()
    return None


def _package_root(dist: Distribution) -> Optional[Path]:
    """Directory holding the distribution's license files.

    The first license candidate found among the distribution's recorded
    files wins; otherwise the dist-info directory is used.
    """
    candidates = set(LICENSE_FILE_CANDIDATES)
    for file in dist.files or []:
        if file.name in candidates:
            return Path(dist.locate_file(file)).parent

    # _path is the dist-info directory for path based distributions
    dist_path = getattr(dist, "_path", None)
    return Path(dist_path) if dist_path is not None else None


def discover_packages() -> list[Package]:
    """Discover all installed packages in the current environment.

    Returns:
        List of Package objects with name, version, declared license and
        the directory to search for license files.

    Raises:
        ScanError: If the environment's metadata cannot be read.
    """
    packages: list[Package] = []

    try:
        for dist in distributions():
            name = dist.metadata.get("Name")
            version = dist.metadata.get("Version")

            # Skip packages with missing metadata
            if name is None or version is None:
                continue

            packages.append(
                Package(
                    name=name,
                    version=version,
                    license=_declared_license(dist),
                    path=_package_root(dist),
                )
            )
    except OSError as e:
        raise ScanError(f"Failed to read installed package metadata: {e}") from e

    logger.debug("Discovered %d installed packages", len(packages))
    # Sort by name for deterministic output
    return sorted(packages, key=lambda p: p.name.lower())


def _parse_manifest(path: Path, content: str) -> Any:
    if path.suffix.lower() == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def load_package_manifest(path: Path) -> list[Package]:
    """Load packages from a YAML or JSON manifest.

    The manifest is either a list of package entries or a mapping with a
    ``packages`` key holding that list. Each entry has ``name`` and
    ``version`` and optionally ``license`` and ``path``. Relative paths
    are resolved against the manifest's directory.

    Args:
        path: Path to the manifest file.

    Returns:
        Packages in manifest order.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read manifest {path}: {e}") from e

    data = _parse_manifest(path, content)
    if isinstance(data, dict):
        data = data.get("packages")
    if not isinstance(data, list):
        raise ConfigurationError(
            f"Manifest {path} must contain a list of packages "
            "or a 'packages' key holding one"
        )

    base_dir = path.parent
    packages: list[Package] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Manifest {path}: entry {index} must be a mapping"
            )
        entry = dict(entry)
        if entry.get("path") is not None:
            package_path = Path(entry["path"]).expanduser()
            if not package_path.is_absolute():
                package_path = base_dir / package_path
            entry["path"] = package_path
        if entry.get("version") is not None:
            entry["version"] = str(entry["version"])
        try:
            packages.append(Package.model_validate(entry))
        except ValidationError as e:
            raise ConfigurationError(
                f"Manifest {path}: invalid entry {index}: "
                f"{format_validation_errors(e)}"
            ) from e

    logger.debug("Loaded %d packages from %s", len(packages), path)
    return packages
