"""
Health check endpoint tests.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from salesops.db import get_db
from salesops.main import app
from salesops.services.catalog import seed_default_catalog


@pytest_asyncio.fixture
async def client(db_session):
    async def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health_endpoint(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "salesops"}


@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/api/health/live")
    assert response.json() == {"status": "alive"}


@pytest.mark.asyncio
async def test_not_ready_without_rates(client):
    response = await client.get("/api/health/ready")

    data = response.json()
    assert data["status"] == "not_ready"
    assert data["database"] == "connected"
    assert data["active_commission_rates"] == 0


@pytest.mark.asyncio
async def test_ready_with_seeded_catalog(client, db_session):
    await seed_default_catalog(db_session)

    response = await client.get("/api/health/ready")

    data = response.json()
    assert data["status"] == "ready"
    assert data["active_commission_rates"] == 3
    assert data["bonus_tiers"] == 7
