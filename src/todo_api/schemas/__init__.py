from src.todo_api.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.todo_api.schemas.task import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
