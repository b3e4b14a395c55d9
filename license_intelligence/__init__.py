"""License Intelligence - license detection and legal risk analysis for packages."""

__version__ = "0.1.0"
