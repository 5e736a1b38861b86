"""Integration tests for the health endpoints."""

from unittest.mock import AsyncMock, patch

import pytest

CHECK_CONNECTION = (
    "itemvault.infrastructure.persistence.database.DatabaseManager.check_connection"
)


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_live(client):
    assert (await client.get("/live")).json()["status"] == "alive"


@pytest.mark.asyncio
async def test_ready(client):
    with patch(CHECK_CONNECTION, new=AsyncMock(return_value=True)):
        response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["object_store"] == "connected"


@pytest.mark.asyncio
async def test_not_ready_when_database_down(client):
    with patch(CHECK_CONNECTION, new=AsyncMock(return_value=False)):
        response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"
