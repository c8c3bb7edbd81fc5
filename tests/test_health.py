"""Health check endpoint tests."""

import pytest

from pkgtrack import __version__


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "pkgtrack"
    assert data["version"] == __version__


@pytest.mark.asyncio
async def test_readiness_checks_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": "ok"}}


@pytest.mark.asyncio
async def test_trace_id_is_echoed(client):
    response = await client.get("/api/v1/health", headers={"X-Trace-Id": "trc_from_client"})
    assert response.headers["X-Trace-Id"] == "trc_from_client"


@pytest.mark.asyncio
async def test_trace_id_is_generated(client):
    response = await client.get("/api/v1/health")
    assert response.headers["X-Trace-Id"].startswith("trc_")
