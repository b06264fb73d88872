"""Task model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.todo_api.models.base import utc_now


class Task(SQLModel, table=True):
    """A task owned by exactly one project.

    The foreign key cascades on delete at the database level; the repository
    also deletes tasks explicitly so backends without FK enforcement behave
    the same.
    """

    __tablename__ = "tasks"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=200)
    completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
