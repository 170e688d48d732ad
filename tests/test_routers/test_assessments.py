from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.models import ActivityLog, ControlResponse, ScopingDecision

# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------


async def _create_assessment(
    client: AsyncClient,
    name: str = "CMMC Level 2 Assessment",
    level: str = "level2",
    organization_name: str = "Acme Defense",
) -> dict:
    """POST /api/assessments and return the parsed JSON body."""
    resp = await client.post(
        "/api/assessments",
        json={"name": name, "level": level, "organization_name": organization_name},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_create_assessment(client: AsyncClient) -> None:
    """POST /api/assessments starts at zero percent complete."""
    data = await _create_assessment(client)

    assert data["name"] == "CMMC Level 2 Assessment"
    assert data["level"] == "level2"
    assert data["organization_name"] == "Acme Defense"
    assert data["completed_percentage"] == 0
    assert "id" in data
    assert "created_at" in data


@pytest.mark.asyncio
async def test_create_assessment_rejects_unknown_level(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/assessments",
        json={"name": "Bad", "level": "level3", "organization_name": "Acme"},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_assessments(client: AsyncClient) -> None:
    await _create_assessment(client, name="First", level="level1")
    await _create_assessment(client, name="Second", level="level2")

    resp = await client.get("/api/assessments")
    assert resp.status_code == 200
    assert {a["name"] for a in resp.json()} == {"First", "Second"}


@pytest.mark.asyncio
async def test_get_assessment(client: AsyncClient) -> None:
    created = await _create_assessment(client)

    resp = await client.get(f"/api/assessments/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_get_assessment_not_found(client: AsyncClient) -> None:
    resp = await client.get(f"/api/assessments/{uuid.uuid4()}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_assessment(client: AsyncClient) -> None:
    """PATCH only changes the supplied fields."""
    created = await _create_assessment(client)

    resp = await client.patch(
        f"/api/assessments/{created['id']}",
        json={"organization_name": "Acme Defense Systems"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["organization_name"] == "Acme Defense Systems"
    assert body["name"] == created["name"]


@pytest.mark.asyncio
async def test_update_assessment_not_found(client: AsyncClient) -> None:
    resp = await client.patch(f"/api/assessments/{uuid.uuid4()}", json={"name": "x"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_completion(client: AsyncClient) -> None:
    created = await _create_assessment(client)

    resp = await client.patch(
        f"/api/assessments/{created['id']}/completion",
        json={"completed_percentage": 42},
    )
    assert resp.status_code == 200
    assert resp.json()["completed_percentage"] == 42


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [-1, 101])
async def test_update_completion_out_of_range(client: AsyncClient, value: int) -> None:
    created = await _create_assessment(client)

    resp = await client.patch(
        f"/api/assessments/{created['id']}/completion",
        json={"completed_percentage": value},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_delete_assessment_cascades(client: AsyncClient, db_session: AsyncSession) -> None:
    """Deleting an assessment removes its responses and scoping decisions."""
    created = await _create_assessment(client)
    base = f"/api/assessments/{created['id']}"
    await client.post(f"{base}/responses", json={"control_id": "3.1.1", "status": "yes"})
    await client.post(f"{base}/scoping", json={"control_id": "3.1.2", "applicable": False})

    resp = await client.delete(base)
    assert resp.status_code == 204

    assert (await client.get(base)).status_code == 404
    assert (await client.get(f"{base}/responses")).status_code == 404
    for model in (ControlResponse, ScopingDecision, ActivityLog):
        remaining = await db_session.scalar(select(func.count()).select_from(model))
        assert remaining == 0


@pytest.mark.asyncio
async def test_delete_assessment_not_found(client: AsyncClient) -> None:
    resp = await client.delete(f"/api/assessments/{uuid.uuid4()}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_controls(client: AsyncClient) -> None:
    resp = await client.get("/api/controls", params={"level": "level1"})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 17
    assert body[0]["control_id"] == "AC.1.001"
    assert body[0]["domain_name"] == "Access Control"

    level2 = (await client.get("/api/controls", params={"level": "level2"})).json()
    assert len(level2) == 110
    assert level2[0]["control_id"] == "3.1.1"
    assert level2[0]["dod_weight"] == 5


@pytest.mark.asyncio
async def test_list_domains(client: AsyncClient) -> None:
    resp = await client.get("/api/controls/domains")
    assert resp.status_code == 200
    codes = [d["code"] for d in resp.json()]
    assert len(codes) == 14
    assert "AC" in codes and "SI" in codes
