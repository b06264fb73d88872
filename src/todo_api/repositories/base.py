"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.todo_api.core.exceptions import ConflictError, PersistenceError
from src.todo_api.core.logging import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Every write operation is a single transaction: it commits once on success
    and rolls back on failure. Storage errors are translated into domain
    errors so callers never see SQLAlchemy exceptions.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def fetch_all(self, query: Any) -> list[ModelType]:
        """Execute a select and return every row."""
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise self._persistence_error("query", e) from e
        return list(result.scalars().all())

    async def fetch_one(self, query: Any) -> ModelType | None:
        """Execute a select expected to match at most one row."""
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise self._persistence_error("query", e) from e
        return result.scalar_one_or_none()

    async def commit(
        self,
        entity: ModelType | None = None,
        conflict_message: str | None = None,
    ) -> None:
        """Commit the current transaction and refresh ``entity`` from the database.

        Raises:
            ConflictError: If the database reports a constraint violation.
            PersistenceError: For any other storage failure.
        """
        try:
            await self.session.commit()
            if entity is not None:
                await self.session.refresh(entity)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(conflict_message or f"Constraint violation: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._persistence_error("commit", e) from e

    def _persistence_error(self, operation: str, error: SQLAlchemyError) -> PersistenceError:
        logger.exception(
            "Database operation failed",
            model=self.model.__name__,
            operation=operation,
        )
        return PersistenceError(str(getattr(error, "orig", None) or error))
