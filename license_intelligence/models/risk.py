"""Legal risk report models for license-intelligence."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from license_intelligence.models.license import License, RiskLevel

RiskFactorCategory = Literal[
    "license_compatibility", "patent_risk", "compliance", "litigation", "governance"
]
Impact = Literal["low", "medium", "high", "critical"]
Likelihood = Literal["very_low", "low", "medium", "high", "very_high"]
ReviewUrgency = Literal["low", "medium", "high", "urgent"]
RequirementStatus = Literal["pending", "in_progress", "completed", "overdue"]

# Urgency levels in increasing order
URGENCY_ORDER: tuple[ReviewUrgency, ...] = ("low", "medium", "high", "urgent")


class ProjectIdentity(BaseModel):
    """Name and version of the assessed project."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="Project name")
    version: Optional[str] = Field(default=None, description="Project version")


class RiskFactor(BaseModel):
    """A contributor to the project's legal risk."""

    model_config = {"extra": "forbid"}

    category: RiskFactorCategory = Field(description="Risk factor category")
    description: str = Field(description="What was found")
    impact: Impact = Field(description="Impact if the risk materializes")
    likelihood: Likelihood = Field(description="How likely the risk is")
    risk_score: int = Field(ge=0, description="Weighted score of the factor")
    mitigation: Optional[str] = Field(default=None, description="Suggested mitigation")


class JurisdictionRisk(BaseModel):
    """Risk specific to a legal jurisdiction."""

    model_config = {"extra": "forbid"}

    jurisdiction: str = Field(description="Jurisdiction name")
    risk_level: RiskLevel = Field(description="Risk level")
    specific_risks: list[str] = Field(default_factory=list, description="Risks")


class PatentRisk(BaseModel):
    """Patent clause exposure introduced by a license."""

    model_config = {"extra": "forbid"}

    license: License = Field(description="License carrying patent clauses")
    patent_clauses: list[str] = Field(default_factory=list, description="Clauses")
    risk_description: str = Field(description="Why the clauses matter")
    risk_level: RiskLevel = Field(description="Risk level")


class ComplianceRequirement(BaseModel):
    """An action the project must take to comply with its licenses."""

    model_config = {"extra": "forbid"}

    requirement: str = Field(description="What must be done")
    responsible: str = Field(description="Who is responsible")
    status: RequirementStatus = Field(default="pending", description="Status")


class LegalReview(BaseModel):
    """Whether, how urgently and on what a legal review is needed."""

    model_config = {"extra": "forbid"}

    required: bool = Field(default=False, description="Review required")
    urgency: ReviewUrgency = Field(default="low", description="Review urgency")
    scope: list[str] = Field(default_factory=list, description="Review areas")
    estimated_hours: int = Field(default=0, ge=0, description="Estimated effort")


class LegalRiskReport(BaseModel):
    """Project-wide legal risk assessment."""

    model_config = {"extra": "forbid"}

    project: ProjectIdentity = Field(description="Assessed project")
    overall_risk: RiskLevel = Field(description="Overall risk level")
    risk_score: int = Field(ge=0, le=100, description="Normalized risk score")
    risk_factors: list[RiskFactor] = Field(default_factory=list)
    jurisdiction_risks: list[JurisdictionRisk] = Field(default_factory=list)
    patent_risks: list[PatentRisk] = Field(default_factory=list)
    compliance_requirements: list[ComplianceRequirement] = Field(default_factory=list)
    legal_review: LegalReview = Field(default_factory=LegalReview)
