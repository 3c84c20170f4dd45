"""
Pydantic schemas for /leads.

An empty website string means "not provided". Emails keep their submitted
case; enrichment seeds are derived from the raw address.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

_email_adapter = TypeAdapter(EmailStr)


class LeadCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str
    website: HttpUrl | None = None

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        # Validate only: the address is hashed and stored exactly as submitted
        try:
            _email_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("value is not a valid email address")
        return value

    @field_validator("website", mode="before")
    @classmethod
    def _blank_website_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def clean_website(self) -> str | None:
        return str(self.website) if self.website else None


class LeadSummary(BaseModel):
    """Lead fields echoed back to the submitter."""

    id: str
    name: str
    email: str
    score: int
    qualified: bool
    company_name: str | None = None
    company_size: str | None = None
    industry: str | None = None
    country: str | None = None


class LeadCreatedResponse(BaseModel):
    success: bool = True
    lead: LeadSummary


class LeadResponse(BaseModel):
    """Full lead row for the dashboard."""

    id: str
    name: str
    email: str
    website: str | None
    company_name: str | None
    company_size: str | None
    industry: str | None
    country: str | None
    score: int
    qualified: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_lead(cls, lead) -> "LeadResponse":
        return cls(
            id=str(lead.id),
            name=lead.name,
            email=lead.email,
            website=lead.website,
            company_name=lead.company_name,
            company_size=lead.company_size,
            industry=lead.industry,
            country=lead.country,
            score=lead.score,
            qualified=lead.qualified,
            created_at=lead.created_at,
            updated_at=lead.updated_at,
        )


class LeadListResponse(BaseModel):
    leads: list[LeadResponse]
