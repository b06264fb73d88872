"""FastAPI dependency injection definitions.

The engine and its session factory live on ``app.state``; each request gets
its own session from them.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.todo_api.core.db import get_session
from src.todo_api.repositories import ProjectRepository, TaskRepository


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Get a database session bound to the application's engine."""
    async with get_session(request.app.state.session_factory) as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
