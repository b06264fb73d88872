from fastapi import APIRouter

from src.todo_api.api import projects, tasks

api_router = APIRouter()
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
