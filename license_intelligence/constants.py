"""Constants for license-intelligence."""

# Exit codes
EXIT_SUCCESS = 0  # No issues found
EXIT_ISSUES = 1  # License issues, conflicts or policy violations found
EXIT_ERROR = 2  # Command failed due to error

# Number of packages detected concurrently before the next batch starts
BATCH_SIZE = 10

# Name and version recorded in every analysis' metadata
ANALYZER_NAME = "LicenseDetector"
ANALYZER_VERSION = "1.0.0"

# Legal disclaimer
LEGAL_DISCLAIMER = (
    "This report provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)

# Short disclaimer for terminal display (concise for readability)
LEGAL_DISCLAIMER_SHORT = (
    "This report provides license information for informational purposes only. "
    "It does not constitute legal advice."
)
