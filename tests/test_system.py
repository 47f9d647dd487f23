import pytest

from app.core.constants import DEPARTMENTS, INTEREST_TAGS


@pytest.mark.asyncio
async def test_root(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.json()["service"] == "Campus Events Backend"


@pytest.mark.asyncio
async def test_metrics(client):
    res = await client.get("/api/metrics")
    assert res.status_code == 200

    body = res.json()
    assert body["status"] == "Online"
    assert body["database"] == "Connected"
    for key in ("cpu", "ram", "disk", "uptime", "db_latency"):
        assert key in body


@pytest.mark.asyncio
async def test_interest_tags_are_public(client):
    res = await client.get("/api/common/interests")
    assert res.status_code == 200
    assert res.json() == INTEREST_TAGS
    assert "Coding" in res.json()


@pytest.mark.asyncio
async def test_departments_are_public(client):
    res = await client.get("/api/common/departments")
    assert res.status_code == 200
    assert res.json() == DEPARTMENTS
