"""Tests for health endpoints."""

import pytest
from httpx import AsyncClient

from swimtimes.config import settings


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test basic health check endpoint."""
    response = await client.get("/health/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app"] == settings.app_name
    assert "timestamp" in data
    assert data["version"] == settings.app_version
    assert data["environment"] == settings.app_env


@pytest.mark.asyncio
async def test_readiness(client: AsyncClient) -> None:
    """Ready once the database and swim data service are wired up."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"] == {"database": "ok", "swim_service": "ok"}


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient) -> None:
    response = await client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}
