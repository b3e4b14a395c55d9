"""License detection for license-intelligence."""
from license_intelligence.detection.detector import LicenseDetector
from license_intelligence.detection.files import FileContentProvider, LocalFileProvider

__all__ = ["FileContentProvider", "LicenseDetector", "LocalFileProvider"]
