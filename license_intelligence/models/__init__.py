"""Pydantic data models for license-intelligence."""

from license_intelligence.models.compatibility import (
    CompatibilityReport,
    CompatibilityResult,
    CompatibilityStatus,
    CompatibilitySummary,
    LicenseConflict,
)
from license_intelligence.models.config import AnalyzerConfig
from license_intelligence.models.document import (
    ComplianceDocumentOptions,
    DocumentFormat,
)
from license_intelligence.models.license import (
    AnalysisMetadata,
    DetectionMethod,
    License,
    LicenseAnalysis,
    LicenseCategory,
    LicenseFileMatch,
    LicenseIssue,
    LicenseObligation,
    ObligationType,
    Package,
    PackageRef,
    RiskLevel,
    ScanOptions,
)
from license_intelligence.models.policy import (
    CategoryRule,
    LicensePolicy,
    PolicyValidationResult,
    PolicyViolation,
    RiskTolerance,
)
from license_intelligence.models.risk import (
    ComplianceRequirement,
    JurisdictionRisk,
    LegalReview,
    LegalRiskReport,
    PatentRisk,
    ProjectIdentity,
    RiskFactor,
)

__all__ = [
    "AnalysisMetadata",
    "AnalyzerConfig",
    "CategoryRule",
    "CompatibilityReport",
    "CompatibilityResult",
    "CompatibilityStatus",
    "CompatibilitySummary",
    "ComplianceDocumentOptions",
    "ComplianceRequirement",
    "DetectionMethod",
    "DocumentFormat",
    "JurisdictionRisk",
    "LegalReview",
    "LegalRiskReport",
    "License",
    "LicenseAnalysis",
    "LicenseCategory",
    "LicenseConflict",
    "LicenseFileMatch",
    "LicenseIssue",
    "LicenseObligation",
    "LicensePolicy",
    "ObligationType",
    "Package",
    "PackageRef",
    "PatentRisk",
    "PolicyValidationResult",
    "PolicyViolation",
    "ProjectIdentity",
    "RiskFactor",
    "RiskLevel",
    "RiskTolerance",
    "ScanOptions",
]
