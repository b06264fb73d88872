"""Integration test fixtures for the HTTP app.

The app is built with the test engine injected, so requests hit the same
in-memory database as the ``db_session`` fixture.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from src.todo_api.main import create_app


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app(engine=engine)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create test client bound to the app via ASGI transport."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def alpha(client: AsyncClient) -> dict:
    """A project titled 'Alpha' created through the API."""
    response = await client.post("/projects", json={"title": "Alpha", "description": "d"})
    assert response.status_code == 201
    return response.json()
