"""Database engine, sessions and the startup connectivity check."""

import ssl
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.todo_api.core.config import Settings
from src.todo_api.core.exceptions import DatabaseUnavailableError
from src.todo_api.core.logging import get_logger
from src.todo_api.core.retry import RetryError, retry

logger = get_logger(__name__)


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get asyncpg connection arguments including SSL configuration."""
    connect_args: dict[str, Any] = {}

    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine shared by every request."""
    url = settings.sqlalchemy_url()
    logger.info(
        "Creating database engine",
        dialect=url.drivername,
        host=url.host,
        port=url.port,
        database=url.database,
        ssl_mode=settings.database_ssl_mode,
    )
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url)
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=_get_connect_args(settings),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def ping(engine: AsyncEngine) -> None:
    """Run a trivial query to prove the database is reachable."""
    async with engine.connect() as connection:
        await connection.execute(text("SELECT 1"))


async def wait_for_database(engine: AsyncEngine, attempts: int, delay: float) -> None:
    """Block until the database answers, retrying with a fixed delay.

    Raises:
        DatabaseUnavailableError: If every attempt fails.
    """

    @retry(attempts=attempts, delay=delay, exceptions=(SQLAlchemyError, OSError))
    async def connect() -> None:
        logger.info("Trying connection to the database")
        await ping(engine)

    try:
        await connect()
    except RetryError as e:
        logger.error(
            "Could not connect to the database",
            attempts=e.attempts,
            error=str(e.last_error),
        )
        raise DatabaseUnavailableError(f"Could not connect to the database: {e.last_error}") from e
    logger.info("Database connection established")


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Open a session and make sure it is closed afterwards."""
    async with session_factory() as session:
        yield session
