"""Skipping packages listed under ``ignored_packages``."""

from __future__ import annotations

import logging
from typing import NamedTuple

from packaging.utils import canonicalize_name

from license_intelligence.models.config import AnalyzerConfig
from license_intelligence.models.license import Package

logger = logging.getLogger(__name__)


class FilterResult(NamedTuple):
    """Packages split by the ignore list.

    Attributes:
        packages: Packages to analyze, in input order.
        ignored: Packages skipped, in input order.
        unmatched: Ignore entries that matched no package.
    """

    packages: list[Package]
    ignored: list[Package]
    unmatched: list[str]

    @property
    def ignored_names(self) -> list[str]:
        return [pkg.name for pkg in self.ignored]


def filter_ignored_packages(
    packages: list[Package],
    config: AnalyzerConfig,
) -> FilterResult:
    """Drop packages named in ``config.ignored_packages``.

    Names are compared in canonical form (PEP 503), so ``Foo_Bar`` in the
    config also skips the installed ``foo-bar``. Entries that match nothing
    are returned in ``unmatched`` and logged.
    """
    if not config.ignored_packages:
        return FilterResult(packages=list(packages), ignored=[], unmatched=[])

    wanted = {canonicalize_name(name): name for name in config.ignored_packages}
    kept: list[Package] = []
    ignored: list[Package] = []
    seen: set[str] = set()
    for pkg in packages:
        key = canonicalize_name(pkg.name)
        if key in wanted:
            ignored.append(pkg)
            seen.add(key)
        else:
            kept.append(pkg)

    unmatched = [name for key, name in wanted.items() if key not in seen]
    for name in unmatched:
        logger.debug("Ignored package '%s' is not among the scanned packages", name)
    return FilterResult(packages=kept, ignored=ignored, unmatched=unmatched)
