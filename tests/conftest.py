import os
import tempfile

import pytest
import pytest_asyncio

# Settings are read at import time, so the environment goes first.
_DB_PATH = os.path.join(tempfile.gettempdir(), f"lead_qualifier_test_{os.getpid()}.db")
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ANYMAIL_FINDER_API_KEY"] = ""
os.environ["DASHBOARD_USERNAME"] = "admin"
os.environ["DASHBOARD_PASSWORD"] = "admin123"
os.environ["ENVIRONMENT"] = "test"

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import delete  # noqa: E402

from lead_qualifier.db.models import Lead  # noqa: E402
from lead_qualifier.db.session import async_session, engine, init_db  # noqa: E402
from lead_qualifier.main import app  # noqa: E402
from lead_qualifier.routes.leads import get_orchestrator  # noqa: E402
from lead_qualifier.services.enrichment import (  # noqa: E402
    EnrichmentOrchestrator,
    SimulatedEnrichmentProvider,
)


@pytest.fixture
def simulator():
    return SimulatedEnrichmentProvider(min_delay_ms=0, max_delay_ms=0)


@pytest_asyncio.fixture
async def db():
    await init_db()
    async with async_session() as session:
        await session.execute(delete(Lead))
        await session.commit()
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db, simulator):
    app.dependency_overrides[get_orchestrator] = lambda: EnrichmentOrchestrator(
        api_key=None, simulated=simulator
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(_DB_PATH):
        os.remove(_DB_PATH)
