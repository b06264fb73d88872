"""Tests for the data access layer against the test database."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.todo_api.core.exceptions import ConflictError, NotFoundError, PersistenceError
from src.todo_api.models import Task
from src.todo_api.repositories import ProjectRepository, TaskRepository
from src.todo_api.schemas import ProjectCreate, ProjectUpdate, TaskCreate, TaskUpdate
from tests.factories import ProjectFactory, TaskFactory

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def project(db_session: AsyncSession):
    project = ProjectFactory.build(title="Alpha")
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


class TestProjectRepository:
    async def test_list_all_orders_by_insertion(self, db_session: AsyncSession):
        for title in ("Zeta", "Alpha", "Mu"):
            db_session.add(ProjectFactory.build(title=title))
            await db_session.commit()

        projects = await ProjectRepository(db_session).list_all()

        assert [p.title for p in projects] == ["Zeta", "Alpha", "Mu"]

    async def test_list_all_filters_archived(self, db_session: AsyncSession):
        db_session.add(ProjectFactory.build(title="Live"))
        db_session.add(ProjectFactory.archived_project(title="Gone"))
        await db_session.commit()
        repo = ProjectRepository(db_session)

        assert [p.title for p in await repo.list_all(archived=True)] == ["Gone"]
        assert [p.title for p in await repo.list_all(archived=False)] == ["Live"]

    async def test_get_by_title(self, db_session: AsyncSession, project):
        found = await ProjectRepository(db_session).get_by_title("Alpha")

        assert found.id == project.id

    async def test_get_by_title_missing_raises(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError, match="Project 'Nope' not found"):
            await ProjectRepository(db_session).get_by_title("Nope")

    async def test_create_duplicate_raises_conflict(self, db_session: AsyncSession, project):
        with pytest.raises(ConflictError):
            await ProjectRepository(db_session).create(ProjectCreate(title="Alpha"))

    async def test_unique_index_catches_race(
        self, db_session: AsyncSession, project, monkeypatch: pytest.MonkeyPatch
    ):
        """A concurrent insert that slips past the pre-check still conflicts."""
        repo = ProjectRepository(db_session)

        async def no_match(title):
            return None

        monkeypatch.setattr(repo, "find_by_title", no_match)

        with pytest.raises(ConflictError, match="already exists"):
            await repo.create(ProjectCreate(title="Alpha"))

    async def test_update_only_supplied_fields(self, db_session: AsyncSession, project):
        before = project.updated_at

        updated = await ProjectRepository(db_session).update(
            "Alpha", ProjectUpdate(description="changed")
        )

        assert updated.title == "Alpha"
        assert updated.description == "changed"
        assert updated.updated_at >= before

    async def test_update_can_clear_description(self, db_session: AsyncSession, project):
        updated = await ProjectRepository(db_session).update(
            "Alpha", ProjectUpdate(description=None)
        )

        assert updated.description is None

    async def test_delete_cascades_to_tasks(self, db_session: AsyncSession, project):
        db_session.add(TaskFactory.build(project_id=project.id))
        db_session.add(TaskFactory.build(project_id=project.id))
        await db_session.commit()

        await ProjectRepository(db_session).delete("Alpha")

        with pytest.raises(NotFoundError):
            await TaskRepository(db_session).list_for_project("Alpha")
        assert await db_session.scalar(select(func.count()).select_from(Task)) == 0

    async def test_set_archived_round_trip(self, db_session: AsyncSession, project):
        repo = ProjectRepository(db_session)

        assert (await repo.set_archived("Alpha", True)).archived is True
        assert (await repo.set_archived("Alpha", False)).archived is False

    async def test_commit_failure_raises_persistence_error(
        self, db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
    ):
        async def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

        with pytest.raises(PersistenceError, match="database is locked"):
            await ProjectRepository(db_session).create(ProjectCreate(title="Locked"))


class TestTaskRepository:
    async def test_create_and_get(self, db_session: AsyncSession, project):
        repo = TaskRepository(db_session)

        task = await repo.create("Alpha", TaskCreate(title="T1"))
        fetched = await repo.get("Alpha", task.id)

        assert fetched.title == "T1"
        assert fetched.project_id == project.id
        assert fetched.completed is False

    async def test_get_scoped_to_project(self, db_session: AsyncSession, project):
        other = ProjectFactory.build(title="Beta")
        db_session.add(other)
        await db_session.commit()
        task = await TaskRepository(db_session).create("Beta", TaskCreate(title="B1"))

        with pytest.raises(NotFoundError):
            await TaskRepository(db_session).get("Alpha", task.id)

    async def test_update_partial(self, db_session: AsyncSession, project):
        repo = TaskRepository(db_session)
        task = await repo.create("Alpha", TaskCreate(title="T1"))

        updated = await repo.update("Alpha", task.id, TaskUpdate(completed=True))

        assert updated.title == "T1"
        assert updated.completed is True

    async def test_delete(self, db_session: AsyncSession, project):
        repo = TaskRepository(db_session)
        task = await repo.create("Alpha", TaskCreate(title="T1"))

        deleted = await repo.delete("Alpha", task.id)

        assert deleted.id == task.id
        assert await repo.list_for_project("Alpha") == []

    async def test_set_completed_toggle(self, db_session: AsyncSession, project):
        repo = TaskRepository(db_session)
        task = await repo.create("Alpha", TaskCreate(title="T1"))

        assert (await repo.set_completed("Alpha", task.id, True)).completed is True
        assert (await repo.set_completed("Alpha", task.id, False)).completed is False

    async def test_missing_project_raises(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await TaskRepository(db_session).create("Nope", TaskCreate(title="T1"))
