"""
Pydantic schemas for the portfolio scan API.
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from policyscan.core.policy_record import PolicyRecord


class PolicyStatus(str, Enum):
    """Expiry status of a single policy."""
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    ACTIVE = "active"
    UNKNOWN = "unknown"


class PolicyIn(BaseModel):
    """
    A policy as submitted by the client.

    Accepts both snake_case names and the field names used by the policy
    store (`insuranceId`, `insuranceType`, `insurancePrice`, ...).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "POL-001",
                "name": "Acme Health Plus",
                "type": "health",
                "premium": 1200,
                "coverage": 500000,
                "expiry_date": "2026-12-31",
            }
        },
    )

    id: Union[str, int] = Field(
        ..., validation_alias=AliasChoices("id", "insuranceId"), description="Unique policy identifier"
    )
    name: Optional[str] = Field(
        None, validation_alias=AliasChoices("name", "insuranceName"), description="Company or product name"
    )
    type: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("type", "insuranceType"),
        description="Policy category, e.g. health, life, auto, home, travel",
    )
    premium: float = Field(
        ..., ge=0, validation_alias=AliasChoices("premium", "insurancePrice"), description="Annual premium"
    )
    coverage: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("coverage", "insuranceCoverage"), description="Sum insured"
    )
    expiry_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("expiry_date", "expiryDate", "insuranceToDate"),
        description="Last day the policy is valid",
    )

    def to_record(self) -> PolicyRecord:
        return PolicyRecord(
            id=self.id,
            type=self.type,
            premium=self.premium,
            coverage=self.coverage,
            expiry_date=self.expiry_date,
            name=self.name,
        )


class PortfolioRequest(BaseModel):
    """Request body shared by every portfolio endpoint."""

    policies: List[PolicyIn] = Field(default_factory=list, description="Policies in the portfolio")
    as_of: Optional[date] = Field(
        None, description="Reference date for expiry checks. Defaults to today."
    )

    def to_records(self) -> List[PolicyRecord]:
        return [policy.to_record() for policy in self.policies]


class PortfolioAnalysisResponse(BaseModel):
    """Portfolio assessment, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    overall_rating: str = Field(..., alias="overallRating", description="Bad, Average or Good")
    score: int = Field(..., ge=0, le=100)
    coverage_gaps: List[str] = Field(default_factory=list, alias="coverageGaps")
    suggestions: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)


class PortfolioOverviewResponse(BaseModel):
    total_policies: int
    total_premium: float
    total_coverage: float
    policies_by_category: Dict[str, int] = Field(default_factory=dict)


class PolicyStatusItem(BaseModel):
    id: Union[str, int]
    name: Optional[str] = None
    type: str
    expiry_date: Optional[date] = None
    days_remaining: Optional[int] = None
    status: PolicyStatus


class PortfolioStatusResponse(BaseModel):
    as_of: date
    policies: List[PolicyStatusItem]


class PortfolioSummaryResponse(BaseModel):
    analysis: PortfolioAnalysisResponse
    summary: str
