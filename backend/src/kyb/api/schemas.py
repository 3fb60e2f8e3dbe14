"""
Pydantic schemas for API request/response validation.

These schemas define the contract between clients and the backend.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from kyb.domain.models import Validation


class CreditRatingEnum(str, Enum):
    """Credit rating for API responses."""
    LOW_RISK = "LOW_RISK"
    MID_RISK = "MID_RISK"
    HIGH_RISK = "HIGH_RISK"


# =============================================================================
# Request Schemas
# =============================================================================

class ValidateCompanyRequest(BaseModel):
    """Request to validate a company."""
    name: str = Field(
        ...,
        min_length=1,
        description="Registered company name",
    )
    nit: str | None = Field(
        default=None,
        description="Tax identifier (NIT); used as lookup key when present",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value.strip()


# =============================================================================
# Response Schemas
# =============================================================================

class CompanyResponse(BaseModel):
    """Validated company."""
    name: str
    nit: str | None = None


class RestrictionResponse(BaseModel):
    """Restriction held by the bank."""
    name: str
    description: str | None = None


class ReportResponse(BaseModel):
    """Regulator report."""
    name: str
    summary: str | None = None


class ValidationResponse(BaseModel):
    """Aggregate company validation."""
    company: CompanyResponse
    exist_in_camara_comercio: bool
    credit_rating: CreditRatingEnum
    restrictions: list[RestrictionResponse]
    report: ReportResponse

    @classmethod
    def from_domain(cls, validation: Validation) -> "ValidationResponse":
        """Build the response from a completed Validation."""
        return cls(
            company=CompanyResponse(
                name=validation.company.name,
                nit=validation.company.nit,
            ),
            exist_in_camara_comercio=validation.exist_in_camara_comercio,
            credit_rating=CreditRatingEnum(validation.credit_rating.value),
            restrictions=[
                RestrictionResponse(name=r.name, description=r.description)
                for r in validation.restrictions
            ],
            report=ReportResponse(
                name=validation.report.name,
                summary=validation.report.summary,
            ),
        )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    blocking_pool_size: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str | None = None
    code: str | None = None
