"""Task endpoints, nested under the owning project.

Task ids only match digits; anything else falls through to a 404.
"""

from fastapi import APIRouter, status

from src.todo_api.api.dependencies import TaskRepo
from src.todo_api.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/projects/{title}/tasks", tags=["tasks"])

NOT_FOUND = {404: {"description": "Project or task not found"}}


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List tasks",
    responses=NOT_FOUND,
)
async def list_tasks(title: str, repo: TaskRepo) -> list[TaskRead]:
    tasks = await repo.list_for_project(title)
    return [TaskRead.model_validate(t) for t in tasks]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses=NOT_FOUND,
)
async def create_task(title: str, request: TaskCreate, repo: TaskRepo) -> TaskRead:
    task = await repo.create(title, request)
    return TaskRead.model_validate(task)


@router.get(
    "/{task_id:int}",
    response_model=TaskRead,
    summary="Get task",
    responses=NOT_FOUND,
)
async def get_task(title: str, task_id: int, repo: TaskRepo) -> TaskRead:
    task = await repo.get(title, task_id)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id:int}",
    response_model=TaskRead,
    summary="Update task",
    description="Update the title and/or completed flag of a task. Omitted fields are unchanged.",
    responses=NOT_FOUND,
)
async def update_task(title: str, task_id: int, request: TaskUpdate, repo: TaskRepo) -> TaskRead:
    task = await repo.update(title, task_id, request)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id:int}",
    response_model=TaskRead,
    summary="Delete task",
    description="Permanently delete a task. Returns the deleted task.",
    responses=NOT_FOUND,
)
async def delete_task(title: str, task_id: int, repo: TaskRepo) -> TaskRead:
    task = await repo.delete(title, task_id)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id:int}/complete",
    response_model=TaskRead,
    summary="Complete task",
    responses=NOT_FOUND,
)
async def complete_task(title: str, task_id: int, repo: TaskRepo) -> TaskRead:
    task = await repo.set_completed(title, task_id, True)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id:int}/complete",
    response_model=TaskRead,
    summary="Undo task completion",
    description="Mark a completed task as not completed. The task itself is not deleted.",
    responses=NOT_FOUND,
)
async def undo_task(title: str, task_id: int, repo: TaskRepo) -> TaskRead:
    task = await repo.set_completed(title, task_id, False)
    return TaskRead.model_validate(task)
