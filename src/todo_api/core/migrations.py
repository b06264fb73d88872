"""Reusable migration runner for both production and tests."""

import asyncio
from pathlib import Path

from alembic.config import Config

from alembic import command
from src.todo_api.core.logging import get_logger

logger = get_logger(__name__)

# alembic.ini sits at the project root, next to src/
DEFAULT_CONFIG_FILE = Path(__file__).resolve().parents[3] / "alembic.ini"


def run_migrations_sync(config_file: str | Path | None = None) -> None:
    """Run Alembic migrations up to head synchronously.

    Args:
        config_file: Path to alembic.ini. Defaults to the project's own file,
            independent of the working directory.
    """
    alembic_cfg = Config(str(config_file or DEFAULT_CONFIG_FILE))
    command.upgrade(alembic_cfg, "head")


async def run_migrations_async(config_file: str | Path | None = None) -> None:
    """Run Alembic migrations from async context.

    Alembic drives its own sync engine, so it runs in a worker thread to keep
    the event loop free.
    """
    logger.info("Running database migrations", config_file=str(config_file or DEFAULT_CONFIG_FILE))
    await asyncio.to_thread(run_migrations_sync, config_file)
    logger.info("Database migrations complete")
