"""
Tests for the /leads and /auth endpoints against a temporary SQLite database.
"""

import pytest

from lead_qualifier.main import app
from lead_qualifier.routes.leads import get_orchestrator
from lead_qualifier.schemas.enrichment import EnrichmentRecord
from lead_qualifier.services.auth import COOKIE_NAME, sign_token
from lead_qualifier.services.hashing import seed_hash


def _auth_headers() -> dict:
    return {"Cookie": f"{COOKIE_NAME}={sign_token('admin')}"}


class BrokenOrchestrator:
    async def enrich(self, email):
        return None


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_create_lead_enriches_and_scores(client):
    response = await client.post(
        "/leads",
        json={"name": "Ada", "email": "a@b.co", "website": "https://globex.example"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    lead = body["lead"]
    assert lead["email"] == "a@b.co"
    assert lead["company_name"] == "Globex Industries"
    assert lead["company_size"] == "51-200"
    assert lead["industry"] == "Finance"
    assert lead["country"] == "FR"
    # website 10 + size 15
    assert lead["score"] == 25
    assert lead["qualified"] is True


@pytest.mark.asyncio
async def test_blank_website_is_not_a_website(client):
    response = await client.post("/leads", json={"name": "Ada", "email": "a@b.co", "website": ""})

    assert response.status_code == 201
    assert response.json()["lead"]["score"] == 15
    assert response.json()["lead"]["qualified"] is False


@pytest.mark.asyncio
async def test_failed_enrichment_still_scores(client):
    # b@b.co hits the simulated outage
    response = await client.post("/leads", json={"name": "Bo", "email": "b@b.co"})

    assert response.status_code == 201
    lead = response.json()["lead"]
    assert lead["score"] == 0
    assert lead["qualified"] is False
    assert lead["company_name"] is None
    assert lead["country"] is None


@pytest.mark.asyncio
async def test_orchestrator_returning_none_scores_empty_record(client):
    app.dependency_overrides[get_orchestrator] = lambda: BrokenOrchestrator()

    response = await client.post(
        "/leads",
        json={"name": "Cy", "email": "cy@corp.com", "website": "https://corp.example"},
    )

    assert response.status_code == 201
    # website 10 minus four missing-field penalties, floored
    assert response.json()["lead"]["score"] == 0


@pytest.mark.asyncio
async def test_duplicate_email_rejected(client):
    payload = {"name": "Ada", "email": "a@b.co"}
    assert (await client.post("/leads", json=payload)).status_code == 201

    response = await client.post("/leads", json=payload)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invalid_json_rejected(client):
    response = await client.post(
        "/leads", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid JSON body."


@pytest.mark.asyncio
async def test_non_object_rejected(client):
    response = await client.post("/leads", json=["a@b.co"])
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, field",
    [
        ({"name": "", "email": "a@b.co"}, "name"),
        ({"name": "x" * 121, "email": "a@b.co"}, "name"),
        ({"name": "Ada", "email": "not-an-email"}, "email"),
        ({"name": "Ada", "email": "a@b.co", "website": "acme.com"}, "website"),
        ({"email": "a@b.co"}, "name"),
    ],
)
async def test_validation_errors(client, payload, field):
    response = await client.post("/leads", json=payload)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert [field] in [err["path"] for err in detail["errors"]]


@pytest.mark.asyncio
async def test_oversized_payload_rejected(client):
    response = await client.post(
        "/leads", json={"name": "Ada", "email": "a@b.co", "website": "https://x.example/" + "a" * 70000}
    )
    assert response.status_code == 413


@pytest.mark.asyncio
async def test_list_requires_auth(client):
    response = await client.get("/leads")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_sorts_and_filters(client):
    await client.post("/leads", json={"name": "Ada", "email": "a@b.co", "website": "https://a.example"})
    await client.post("/leads", json={"name": "Bo", "email": "b@b.co"})
    await client.post("/leads", json={"name": "Cal", "email": "c@b.co"})

    response = await client.get("/leads", headers=_auth_headers())
    assert response.status_code == 200
    scores = [lead["score"] for lead in response.json()["leads"]]
    assert scores == sorted(scores, reverse=True)
    assert len(scores) == 3

    response = await client.get("/leads", params={"sort": "score", "order": "asc"}, headers=_auth_headers())
    scores = [lead["score"] for lead in response.json()["leads"]]
    assert scores == sorted(scores)

    response = await client.get("/leads", params={"qualified": "true"}, headers=_auth_headers())
    leads = response.json()["leads"]
    assert [lead["email"] for lead in leads] == ["a@b.co"]
    assert all(lead["qualified"] for lead in leads)


@pytest.mark.asyncio
async def test_list_by_created_at(client):
    for i in range(3):
        await client.post("/leads", json={"name": f"L{i}", "email": f"lead{i}@corp.com"})

    response = await client.get(
        "/leads", params={"sort": "created_at", "order": "asc"}, headers=_auth_headers()
    )

    assert [lead["name"] for lead in response.json()["leads"]] == ["L0", "L1", "L2"]


@pytest.mark.asyncio
async def test_login_sets_cookie(client):
    response = await client.post("/auth/login", json={"username": "admin", "password": "admin123"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert response.headers["set-cookie"].startswith(f"{COOKIE_NAME}=")
    assert "httponly" in response.headers["set-cookie"].lower()


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    response = await client.post("/auth/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    response = await client.post("/auth/login", json={"username": "admin"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    response = await client.post("/auth/logout")
    assert response.status_code == 200
    assert COOKIE_NAME in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_malformed_content_length_rejected(client):
    response = await client.post(
        "/leads",
        content=b'{"name": "Ada", "email": "a@b.co"}',
        headers={"content-type": "application/json", "content-length": "abc"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid Content-Length header."


@pytest.mark.asyncio
async def test_email_is_enriched_and_stored_as_submitted(client, simulator):
    assert seed_hash("Jane@ACME.COM") != seed_hash("Jane@acme.com")
    expected = await simulator.simulate("Jane@ACME.COM") or EnrichmentRecord()

    response = await client.post("/leads", json={"name": "Jane", "email": "Jane@ACME.COM"})

    assert response.status_code == 201
    lead = response.json()["lead"]
    assert lead["email"] == "Jane@ACME.COM"
    assert lead["company_name"] == expected.company_name
    assert lead["company_size"] == expected.company_size
    assert lead["industry"] == expected.industry
    assert lead["country"] == expected.country
