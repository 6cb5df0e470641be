"""API test fixtures — app client with the vehicle store replaced by a fake.

Invariants:
    - get_vehicle_store overridden per test; no database involved
    - lenient_client returns catch-all responses instead of re-raising them
"""

import pytest
from httpx import ASGITransport, AsyncClient

from fakes import FakeVehicleStore
from vehicle_api.api.routes.vehicles import get_vehicle_store
from vehicle_api.main import app


@pytest.fixture
def fake_store():
    return FakeVehicleStore()


@pytest.fixture
async def client(fake_store):
    app.dependency_overrides[get_vehicle_store] = lambda: fake_store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def lenient_client(fake_store):
    """Client that returns the catch-all response instead of re-raising."""
    app.dependency_overrides[get_vehicle_store] = lambda: fake_store
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
