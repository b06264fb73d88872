"""SQLModel table models.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from src.todo_api.models.base import utc_now
from src.todo_api.models.project import Project
from src.todo_api.models.task import Task

__all__ = [
    "Project",
    "Task",
    "utc_now",
]
