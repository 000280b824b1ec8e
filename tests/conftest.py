"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sms_admin.api.dependencies import get_storage
from sms_admin.api.main import create_app
from sms_admin.storage.fixtures import build_demo_fixtures
from sms_admin.storage.memory import InMemoryStorage


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage seeded with the demo data, without latency."""
    store = InMemoryStorage(latency_scale=0)
    await store.seed(build_demo_fixtures())
    return store


@pytest.fixture
def empty_storage():
    """Create empty in-memory storage for tests."""
    return InMemoryStorage(latency_scale=0)


@pytest.fixture
def app(storage):
    """Create test application backed by the test storage."""
    application = create_app()
    application.dependency_overrides[get_storage] = lambda: storage
    return application


@pytest_asyncio.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
