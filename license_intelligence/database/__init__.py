"""License metadata store for license-intelligence."""
from license_intelligence.database.store import (
    LicenseStore,
    StaticLicenseStore,
    get_license_store,
)

__all__ = ["LicenseStore", "StaticLicenseStore", "get_license_store"]
