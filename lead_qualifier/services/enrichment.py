"""
Lead enrichment: AnyMail Finder lookup or deterministic simulation.

Exactly one provider answers per call. Provider failures never propagate:
they are logged and surface as None, and the caller scores the lead with an
empty record instead.
"""

import asyncio
import logging
import random
from enum import Enum

import httpx

from lead_qualifier.config import Settings
from lead_qualifier.schemas.enrichment import AnyMailFinderPerson, EnrichmentRecord
from lead_qualifier.services.hashing import seed_hash

logger = logging.getLogger(__name__)


ANYMAIL_FINDER_BASE_URL = "https://api.anymailfinder.com/v5.0"

MOCK_COMPANIES = ("Acme Corp", "Globex Industries", "Initech Solutions", "Umbrella Ltd", "Soylent Tech")
MOCK_SIZES = ("1-10", "11-50", "51-200", "201-500", "500+")
MOCK_INDUSTRIES = ("Technology", "Finance", "Healthcare", "E-commerce", "SaaS", "Consulting")
MOCK_COUNTRIES = ("US", "UK", "CA", "AU", "DE", "FR", "IN")

# One in five seeds simulates a provider outage
_FAILURE_MODULUS = 5


def mask_email(email: str) -> str:
    """Hide the local part for logs: jane@acme.com -> j***@acme.com."""
    local, at, domain = email.partition("@")
    return f"{local[:1]}***{at}{domain}"


def _pick(options: tuple[str, ...], seed: int) -> str:
    return options[seed % len(options)]


class SimulatedEnrichmentProvider:
    """
    Deterministic stand-in used when no AnyMail Finder key is configured.

    The record depends only on the email. The artificial latency is drawn
    from [min_delay_ms, max_delay_ms]; pass 0 for both to disable it.
    """

    def __init__(self, min_delay_ms: int = 400, max_delay_ms: int = 800):
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError("Invalid simulated delay window")
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms

    async def _delay(self) -> None:
        if self.max_delay_ms <= 0:
            return
        await asyncio.sleep(random.randint(self.min_delay_ms, self.max_delay_ms) / 1000)

    async def simulate(self, email: str) -> EnrichmentRecord | None:
        await self._delay()

        seed = seed_hash(email)
        if seed % _FAILURE_MODULUS == 0:
            logger.warning(f"[mock] simulated failure for {mask_email(email)}")
            return None

        # Distinct offsets decorrelate the four picks for one seed
        return EnrichmentRecord(
            company_name=_pick(MOCK_COMPANIES, seed),
            company_size=_pick(MOCK_SIZES, seed + 1),
            industry=_pick(MOCK_INDUSTRIES, seed + 2),
            country=_pick(MOCK_COUNTRIES, seed + 3),
        )


class RealEnrichmentProvider:
    """
    AnyMail Finder person lookup (https://anymailfinder.com/api/).

    Only the company name is mapped from the person record. Size, industry
    and country stay empty even on success.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = ANYMAIL_FINDER_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, email: str) -> EnrichmentRecord | None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}/search/person.json",
                    params={"email": email},
                    headers={"X-API-KEY": self.api_key},
                )
        except httpx.HTTPError as e:
            logger.error(f"[enrichment] network error for {mask_email(email)}: {e!r}")
            return None

        if not response.is_success:
            logger.error(f"[enrichment] API returned {response.status_code} for {mask_email(email)}")
            return None

        try:
            person = AnyMailFinderPerson.model_validate(response.json())
        except ValueError as e:  # bad JSON or a body pydantic rejects
            logger.error(f"[enrichment] unreadable response for {mask_email(email)}: {e}")
            return None

        logger.info(f"[enrichment] resolved {mask_email(email)} (company={person.company!r})")
        return EnrichmentRecord(company_name=person.company or None)


class EnrichmentMode(str, Enum):
    REAL = "real"
    SIMULATED = "simulated"


class EnrichmentOrchestrator:
    """
    Picks the provider for each call from the configured credential.

    A configured key means AnyMail Finder, otherwise the simulator. There is
    no fallback between them, and enrich() never raises.
    """

    def __init__(
        self,
        api_key: str | None,
        real: RealEnrichmentProvider | None = None,
        simulated: SimulatedEnrichmentProvider | None = None,
    ):
        self.api_key = api_key or ""
        if real is None and self.api_key:
            real = RealEnrichmentProvider(self.api_key)
        self.real = real
        self.simulated = simulated or SimulatedEnrichmentProvider()

    @property
    def mode(self) -> EnrichmentMode:
        return EnrichmentMode.REAL if self.api_key else EnrichmentMode.SIMULATED

    async def enrich(self, email: str) -> EnrichmentRecord | None:
        mode = self.mode
        try:
            if mode is EnrichmentMode.REAL:
                return await self.real.fetch(email)
            return await self.simulated.simulate(email)
        except Exception:
            logger.exception(f"[enrichment] {mode.value} provider failed for {mask_email(email)}")
            return None


def build_orchestrator(settings: Settings) -> EnrichmentOrchestrator:
    """Wire an orchestrator from application settings."""
    real = None
    if settings.anymail_finder_api_key:
        real = RealEnrichmentProvider(
            api_key=settings.anymail_finder_api_key,
            base_url=settings.anymail_finder_base_url,
            timeout=settings.enrichment_timeout_seconds,
        )
    else:
        logger.warning("[enrichment] No API key set, using simulated enrichment")

    return EnrichmentOrchestrator(
        api_key=settings.anymail_finder_api_key,
        real=real,
        simulated=SimulatedEnrichmentProvider(
            min_delay_ms=settings.simulated_delay_min_ms,
            max_delay_ms=settings.simulated_delay_max_ms,
        ),
    )
