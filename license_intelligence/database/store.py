"""License store: SPDX id to canonical license record lookup."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable, Optional, Protocol

from license_intelligence.database.data import LICENSE_DATA
from license_intelligence.models.license import License


class LicenseStore(Protocol):
    """Read-only source of canonical license records."""

    def lookup(self, spdx_id: str) -> Optional[License]:
        """Return the license for ``spdx_id``, or None if it is unknown."""
        ...


class StaticLicenseStore:
    """License store backed by an in-memory table built once at startup.

    Lookups match the canonical SPDX id first and then any deprecated id
    recorded for a license (``GPL-3.0`` resolves to ``GPL-3.0-only``).
    A miss returns None; it is never an error.
    """

    def __init__(self, records: Iterable[dict[str, Any]] = LICENSE_DATA) -> None:
        self._licenses: dict[str, License] = {}
        self._deprecated: dict[str, str] = {}

        for record in records:
            license_ = License.model_validate(record)
            self._licenses[license_.spdx_id] = license_
            for deprecated_id in license_.deprecated_ids:
                self._deprecated[deprecated_id] = license_.spdx_id

    def lookup(self, spdx_id: str) -> Optional[License]:
        """Look up a license by SPDX identifier.

        Args:
            spdx_id: SPDX license identifier.

        Returns:
            A copy of the canonical record, or None if not found.
        """
        key = spdx_id.strip()
        license_ = self._licenses.get(key)
        if license_ is None and key in self._deprecated:
            license_ = self._licenses[self._deprecated[key]]
        if license_ is None:
            return None
        # Hand out copies so callers cannot alter the canonical record
        return license_.model_copy(deep=True)

    def __contains__(self, spdx_id: object) -> bool:
        return isinstance(spdx_id, str) and self.lookup(spdx_id) is not None

    def __len__(self) -> int:
        return len(self._licenses)

    @property
    def spdx_ids(self) -> list[str]:
        """Canonical SPDX ids known to the store, in table order."""
        return list(self._licenses)


@lru_cache(maxsize=1)
def get_license_store() -> StaticLicenseStore:
    """Get the process-wide license store built from the bundled table."""
    return StaticLicenseStore()
