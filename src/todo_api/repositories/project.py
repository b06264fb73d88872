"""Repository for Project entity."""

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.todo_api.core.exceptions import ConflictError, NotFoundError
from src.todo_api.core.logging import get_logger
from src.todo_api.models import Project, Task, utc_now
from src.todo_api.repositories.base import BaseRepository
from src.todo_api.schemas.project import ProjectCreate, ProjectUpdate

logger = get_logger(__name__)


def _duplicate_title(title: str) -> str:
    return f"Project with title '{title}' already exists"


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity, keyed externally by title."""

    model = Project

    async def list_all(self, archived: bool | None = None) -> list[Project]:
        """List projects in insertion order, optionally filtered by archived state."""
        query = select(Project)
        if archived is not None:
            query = query.where(Project.archived == archived)
        return await self.fetch_all(query.order_by(Project.id))

    async def find_by_title(self, title: str) -> Project | None:
        """Get project by exact, case-sensitive title."""
        return await self.fetch_one(select(Project).where(Project.title == title))

    async def get_by_title(self, title: str) -> Project:
        """Get project by title.

        Raises:
            NotFoundError: If no project has this title.
        """
        project = await self.find_by_title(title)
        if project is None:
            raise NotFoundError(f"Project '{title}' not found")
        return project

    async def create(self, data: ProjectCreate) -> Project:
        # Check for duplicate title before creation; the unique index catches races
        if await self.find_by_title(data.title) is not None:
            raise ConflictError(_duplicate_title(data.title))

        project = Project(title=data.title, description=data.description)
        self.add(project)
        await self.commit(project, conflict_message=_duplicate_title(data.title))
        logger.info("Project created", project_id=project.id, title=project.title)
        return project

    async def update(self, title: str, data: ProjectUpdate) -> Project:
        """Update the supplied fields of a project."""
        project = await self.get_by_title(title)

        if data.title is not None and data.title != project.title:
            if await self.find_by_title(data.title) is not None:
                raise ConflictError(_duplicate_title(data.title))
            project.title = data.title
        if "description" in data.model_fields_set:
            project.description = data.description

        # SQLModel has no onupdate callback, set it explicitly
        project.updated_at = utc_now()
        await self.commit(project, conflict_message=_duplicate_title(project.title))
        logger.info("Project updated", project_id=project.id, title=project.title)
        return project

    async def delete(self, title: str) -> Project:
        """Hard-delete a project together with all of its tasks."""
        project = await self.get_by_title(title)
        try:
            await self.session.execute(delete(Task).where(Task.project_id == project.id))
            await self.session.delete(project)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._persistence_error("delete", e) from e
        await self.commit()
        logger.info("Project deleted", project_id=project.id, title=project.title)
        return project

    async def set_archived(self, title: str, archived: bool) -> Project:
        """Archive or restore a project. Setting the current value again is a no-op."""
        project = await self.get_by_title(title)
        project.archived = archived
        project.updated_at = utc_now()
        await self.commit(project)
        logger.info("Project archived" if archived else "Project restored", project_id=project.id)
        return project
