"""Repository layer - data access abstraction."""

from src.todo_api.repositories.base import BaseRepository
from src.todo_api.repositories.project import ProjectRepository
from src.todo_api.repositories.task import TaskRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
]
