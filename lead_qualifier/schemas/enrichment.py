"""
Enrichment and scoring schemas.

EnrichmentRecord is frozen: a provider produces it once per lead and nothing
merges into it afterwards.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EnrichmentRecord(BaseModel):
    """Company attributes resolved for a contact. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    company_name: str | None = None
    company_size: str | None = None  # free-text bucket: "11-50", "500+"
    industry: str | None = None
    country: str | None = None


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0)
    qualified: bool


class AnyMailFinderPerson(BaseModel):
    """Person record returned by AnyMail Finder v5 (https://anymailfinder.com/api/)."""

    model_config = ConfigDict(extra="ignore")

    company: str | None = None

    # Not mapped into EnrichmentRecord; any JSON value is accepted
    email: Any = None
    first_name: Any = None
    last_name: Any = None
    domain: Any = None
    position: Any = None
    linkedin: Any = None
    twitter: Any = None
    phone: Any = None
