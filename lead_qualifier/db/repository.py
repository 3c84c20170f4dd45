from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lead_qualifier.db.models import Lead
from lead_qualifier.schemas.enrichment import EnrichmentRecord, ScoreResult


SORTABLE_COLUMNS = {
    "score": Lead.score,
    "created_at": Lead.created_at,
}


async def get_lead_by_email(session: AsyncSession, email: str) -> Lead | None:
    stmt = select(Lead).where(Lead.email == email)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_lead(
    session: AsyncSession,
    name: str,
    email: str,
    website: str | None,
    enrichment: EnrichmentRecord,
    result: ScoreResult,
) -> Lead:
    """Persist a scored lead. Raises IntegrityError on a duplicate email."""
    lead = Lead(
        name=name,
        email=email,
        website=website,
        company_name=enrichment.company_name,
        company_size=enrichment.company_size,
        industry=enrichment.industry,
        country=enrichment.country,
        score=result.score,
        qualified=result.qualified,
    )
    session.add(lead)
    await session.flush()
    return lead


async def list_leads(
    session: AsyncSession,
    qualified_only: bool = False,
    sort: str = "score",
    order: str = "desc",
) -> list[Lead]:
    column = SORTABLE_COLUMNS.get(sort, Lead.score)
    stmt = select(Lead).order_by(column.asc() if order == "asc" else column.desc())
    if qualified_only:
        stmt = stmt.where(Lead.qualified.is_(True))
    result = await session.execute(stmt)
    return list(result.scalars().all())
