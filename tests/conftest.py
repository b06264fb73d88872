"""Root test fixtures shared across all test types.

Tests run against an in-memory SQLite database so no external PostgreSQL is
needed. HTTP fixtures are in tests/integration/conftest.py.
"""

import os

# Point settings at SQLite before any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.todo_api import models  # noqa: F401 - registers tables on the metadata
from src.todo_api.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables created.

    StaticPool keeps a single connection so every session sees the same data.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(test_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for direct database operations.

    The session does not auto-commit; tests call `await session.commit()`.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session
