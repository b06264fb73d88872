"""Project model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.todo_api.models.base import utc_now


class Project(SQLModel, table=True):
    """A project, looked up externally by its unique, case-sensitive title."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=200, unique=True, index=True)
    description: str | None = Field(default=None, max_length=1000)
    archived: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
