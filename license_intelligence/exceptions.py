"""Custom exceptions for license-intelligence."""


class LicenseIntelligenceError(Exception):
    """Base exception for all license-intelligence errors."""

    pass


class DetectionError(LicenseIntelligenceError):
    """Exception raised when license detection fails for a single package.

    Carries the identity of the package so batch callers can report
    which item failed without aborting the whole scan.
    """

    def __init__(self, package_name: str, package_version: str, message: str) -> None:
        self.package_name = package_name
        self.package_version = package_version
        super().__init__(
            f"License detection failed for {package_name}@{package_version}: {message}"
        )


class UnsupportedFormatError(LicenseIntelligenceError, ValueError):
    """Exception raised when a compliance document format is not supported."""

    def __init__(self, format_name: str) -> None:
        self.format_name = format_name
        super().__init__(f"Unsupported document format: {format_name}")


class ConfigurationError(LicenseIntelligenceError):
    """Exception raised when configuration or input files are invalid."""

    pass


class ScanError(LicenseIntelligenceError):
    """Exception raised when package discovery fails."""

    pass
