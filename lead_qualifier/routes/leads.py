"""
/leads: lead submission (enrich, score, persist) and the dashboard listing.

Enrichment failures never fail a submission: the lead is scored against an
empty record instead.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from lead_qualifier.config import settings
from lead_qualifier.db.repository import create_lead, get_lead_by_email, list_leads
from lead_qualifier.db.session import async_session
from lead_qualifier.schemas.enrichment import EnrichmentRecord
from lead_qualifier.schemas.leads import (
    LeadCreatedResponse,
    LeadCreateRequest,
    LeadListResponse,
    LeadResponse,
    LeadSummary,
)
from lead_qualifier.services.auth import require_user
from lead_qualifier.services.enrichment import (
    EnrichmentOrchestrator,
    build_orchestrator,
    mask_email,
)
from lead_qualifier.services.scoring import calculate_score

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["leads"])

_orchestrator: EnrichmentOrchestrator | None = None


def get_orchestrator() -> EnrichmentOrchestrator:
    """Process-wide orchestrator, built lazily from settings."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator(settings)
    return _orchestrator


@router.post("", response_model=LeadCreatedResponse, status_code=201)
async def create_lead_api(
    request: Request,
    orchestrator: EnrichmentOrchestrator = Depends(get_orchestrator),
):
    """
    Submit a lead.

    - Rejects duplicate emails with 409 before any enrichment call.
    - Enrichment returning nothing scores the lead against an empty record.
    """
    # ── 0. Size guard ────────────────────────────────────────────────────────
    content_length = request.headers.get("content-length")
    if content_length is not None and not content_length.isdecimal():
        raise HTTPException(status_code=400, detail="Invalid Content-Length header.")
    if content_length and int(content_length) > settings.max_payload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Payload too large. Maximum size is {settings.max_payload_bytes} bytes.",
        )

    # ── 1. Parse and validate body ───────────────────────────────────────────
    try:
        payload = await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid JSON body.")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Payload must be a JSON object.")

    try:
        data = LeadCreateRequest.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Validation failed", "errors": _format_errors(e)},
        )

    # ── 2. Duplicate check ───────────────────────────────────────────────────
    async with async_session() as session:
        if await get_lead_by_email(session, data.email):
            raise HTTPException(status_code=409, detail="A lead with this email already exists.")

    # ── 3. Enrich (network I/O, outside any DB transaction) and score ────────
    website = data.clean_website
    enrichment = await orchestrator.enrich(data.email)
    if enrichment is None:
        enrichment = EnrichmentRecord()

    result = calculate_score(website is not None, enrichment)
    logger.info(f"Scored {mask_email(data.email)}: {result.score} (qualified={result.qualified})")

    # ── 4. Persist ───────────────────────────────────────────────────────────
    async with async_session() as session:
        try:
            lead = await create_lead(
                session=session,
                name=data.name,
                email=data.email,
                website=website,
                enrichment=enrichment,
                result=result,
            )
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent submission for the same email
            await session.rollback()
            raise HTTPException(status_code=409, detail="A lead with this email already exists.")

    return LeadCreatedResponse(
        lead=LeadSummary(
            id=str(lead.id),
            name=lead.name,
            email=lead.email,
            score=lead.score,
            qualified=lead.qualified,
            company_name=lead.company_name,
            company_size=lead.company_size,
            industry=lead.industry,
            country=lead.country,
        )
    )


@router.get("", response_model=LeadListResponse, dependencies=[Depends(require_user)])
async def list_leads_api(
    qualified: Optional[str] = Query(None, description="'true' to return qualified leads only"),
    sort: Optional[str] = Query(None, description="score | created_at"),
    order: Optional[str] = Query(None, description="asc | desc"),
):
    """Return leads for the dashboard, best scores first by default."""
    async with async_session() as session:
        leads = await list_leads(
            session,
            qualified_only=qualified == "true",
            sort="created_at" if sort == "created_at" else "score",
            order="asc" if order == "asc" else "desc",
        )
        await session.commit()

    return LeadListResponse(leads=[LeadResponse.from_lead(lead) for lead in leads])


# ── Helpers ──────────────────────────────────────────────────────────────────

def _format_errors(error: ValidationError) -> list[dict]:
    return [
        {"path": [str(part) for part in err["loc"]], "message": err["msg"]}
        for err in error.errors()
    ]
