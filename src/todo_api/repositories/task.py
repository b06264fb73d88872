"""Repository for Task entity, always scoped to the owning project."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.todo_api.core.exceptions import NotFoundError
from src.todo_api.core.logging import get_logger
from src.todo_api.models import Task, utc_now
from src.todo_api.repositories.base import BaseRepository
from src.todo_api.repositories.project import ProjectRepository
from src.todo_api.schemas.task import TaskCreate, TaskUpdate

logger = get_logger(__name__)

# tasks.id is a 32-bit INTEGER column
MAX_TASK_ID = 2**31 - 1


class TaskRepository(BaseRepository[Task]):
    """Repository for Task entity.

    Tasks are addressed by (project title, task id). A task id that belongs to
    a different project is reported as not found.
    """

    model = Task

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.projects = ProjectRepository(session)

    async def list_for_project(self, project_title: str) -> list[Task]:
        project = await self.projects.get_by_title(project_title)
        query = select(Task).where(Task.project_id == project.id).order_by(Task.id)
        return await self.fetch_all(query)

    async def get(self, project_title: str, task_id: int) -> Task:
        """Get a task of a project.

        Raises:
            NotFoundError: If the project or the task does not exist.
        """
        project = await self.projects.get_by_title(project_title)
        task = None
        if 0 < task_id <= MAX_TASK_ID:
            task = await self.fetch_one(
                select(Task).where(Task.id == task_id, Task.project_id == project.id)
            )
        if task is None:
            raise NotFoundError(f"Task {task_id} not found in project '{project_title}'")
        return task

    async def create(self, project_title: str, data: TaskCreate) -> Task:
        project = await self.projects.get_by_title(project_title)
        task = Task(project_id=project.id, title=data.title, completed=data.completed)
        self.add(task)
        await self.commit(task)
        logger.info("Task created", task_id=task.id, project_id=project.id)
        return task

    async def update(self, project_title: str, task_id: int, data: TaskUpdate) -> Task:
        """Update the supplied fields of a task."""
        task = await self.get(project_title, task_id)
        if data.title is not None:
            task.title = data.title
        if data.completed is not None:
            task.completed = data.completed
        task.updated_at = utc_now()
        await self.commit(task)
        logger.info("Task updated", task_id=task.id, project_id=task.project_id)
        return task

    async def delete(self, project_title: str, task_id: int) -> Task:
        task = await self.get(project_title, task_id)
        try:
            await self.session.delete(task)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._persistence_error("delete", e) from e
        await self.commit()
        logger.info("Task deleted", task_id=task.id, project_id=task.project_id)
        return task

    async def set_completed(self, project_title: str, task_id: int, completed: bool) -> Task:
        """Mark a task completed or undo it. Setting the current value again is a no-op."""
        task = await self.get(project_title, task_id)
        task.completed = completed
        task.updated_at = utc_now()
        await self.commit(task)
        logger.info("Task completed" if completed else "Task reopened", task_id=task.id)
        return task
