"""Fixtures for end-to-end API tests.

The app is served from a test container whose in-memory repositories live
for the whole test, so shows seeded through the container are visible to
every request.
"""

import httpx
import pytest_asyncio

from encore.domain.repository import ShowRepository
from encore.interface.api.app import create_app
from tests.conftest import make_show, make_token
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """Test container shared by the app and the test body."""
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    """Unauthenticated client."""
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def owner_client(client, owner_id):
    """Client authenticated as ``owner_id``."""
    client.cookies.set("auth_token", make_token(owner_id))
    return client


@pytest_asyncio.fixture
async def seed_shows(container):
    """Save shows directly, the way the show catalog would."""
    show_repo = await container.get(ShowRepository)

    async def _seed(owner_id, count=1, **fields):
        return [await show_repo.save(make_show(owner_id, **fields)) for _ in range(count)]

    return _seed
