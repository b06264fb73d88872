"""Project endpoints.

Projects are addressed by their unique title. Archiving is a soft flag
toggled through the ``/archive`` sub-resource: PUT archives, DELETE restores.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.todo_api.api.dependencies import ProjectRepo
from src.todo_api.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])

NOT_FOUND = {404: {"description": "Project not found"}}


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List all projects in insertion order.",
)
async def list_projects(
    repo: ProjectRepo,
    archived: Annotated[
        bool | None, Query(description="Only projects in this archived state")
    ] = None,
) -> list[ProjectRead]:
    projects = await repo.list_all(archived=archived)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        409: {"description": "Project with this title already exists"},
    },
)
async def create_project(request: ProjectCreate, repo: ProjectRepo) -> ProjectRead:
    project = await repo.create(request)
    return ProjectRead.model_validate(project)


@router.get(
    "/{title}",
    response_model=ProjectRead,
    summary="Get project",
    responses=NOT_FOUND,
)
async def get_project(title: str, repo: ProjectRepo) -> ProjectRead:
    project = await repo.get_by_title(title)
    return ProjectRead.model_validate(project)


@router.put(
    "/{title}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update the title and/or description of a project. Omitted fields are unchanged.",
    responses={
        **NOT_FOUND,
        409: {"description": "Project with this title already exists"},
    },
)
async def update_project(title: str, request: ProjectUpdate, repo: ProjectRepo) -> ProjectRead:
    project = await repo.update(title, request)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{title}",
    response_model=ProjectRead,
    summary="Delete project",
    description="Permanently delete a project and all of its tasks. Returns the deleted project.",
    responses=NOT_FOUND,
)
async def delete_project(title: str, repo: ProjectRepo) -> ProjectRead:
    project = await repo.delete(title)
    return ProjectRead.model_validate(project)


@router.put(
    "/{title}/archive",
    response_model=ProjectRead,
    summary="Archive project",
    responses=NOT_FOUND,
)
async def archive_project(title: str, repo: ProjectRepo) -> ProjectRead:
    project = await repo.set_archived(title, True)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{title}/archive",
    response_model=ProjectRead,
    summary="Restore project",
    description="Undo an archive. The project itself is not deleted.",
    responses=NOT_FOUND,
)
async def restore_project(title: str, repo: ProjectRepo) -> ProjectRead:
    project = await repo.set_archived(title, False)
    return ProjectRead.model_validate(project)
