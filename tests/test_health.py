"""Tests for health check endpoints."""

import pytest


@pytest.mark.asyncio
async def test_health_endpoint(app_client):
    """Health endpoint returns 200 with expected fields."""
    response = await app_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["backend"] == "python-fastapi"
    assert "version" in data
    assert "timestamp" in data
    assert data["sessions"] == 0
    assert data["users"] == 0


@pytest.mark.asyncio
async def test_health_counts_sessions(app_client):
    """Health reports the size of the session store."""
    await app_client.post("/sessions/create", json={"videoId": 1})
    await app_client.post("/sessions/create", json={"videoId": 2})

    response = await app_client.get("/health")
    assert response.json()["sessions"] == 2
