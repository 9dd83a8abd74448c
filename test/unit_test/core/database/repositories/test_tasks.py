"""Unit tests for TaskRepository."""

import pytest

from taskmanager.core.database.entities.tasks import Task
from taskmanager.core.database.repositories.tasks import TaskQuery

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def tasks(task_repo, saved_user):
    created = []
    for description, completed in (("b", False), ("a", True), ("c", False)):
        created.append(await task_repo.create(Task(description=description, completed=completed, owner_id=saved_user.id)))
    return created


class TestTaskRepository:
    async def test_get_for_owner(self, task_repo, saved_user, tasks):
        task = tasks[0]

        assert (await task_repo.get_for_owner(task.id, saved_user.id)).id == task.id
        assert await task_repo.get_for_owner(task.id, saved_user.id + 1) is None

    async def test_update_bumps_updated_at(self, task_repo, tasks):
        task = tasks[0]
        before = task.updated_at
        task.completed = True

        updated = await task_repo.update(task)

        assert updated.completed is True
        assert updated.updated_at >= before

    async def test_delete(self, task_repo, tasks):
        assert await task_repo.delete(tasks[0].id) is True
        assert await task_repo.delete(tasks[0].id) is False
        assert await task_repo.get_by_id(tasks[0].id) is None

    async def test_delete_task_returns_it(self, task_repo, tasks):
        deleted = await task_repo.delete_task(tasks[1])

        assert deleted.description == "a"
        assert await task_repo.get_by_id(tasks[1].id) is None


class TestTaskSearch:
    async def test_default_order_is_by_id(self, task_repo, saved_user, tasks):
        result = await task_repo.search(TaskQuery(), owner_id=saved_user.id)

        assert [task.description for task in result] == ["b", "a", "c"]

    async def test_filter_completed(self, task_repo, saved_user, tasks):
        result = await task_repo.search(TaskQuery(completed=False), owner_id=saved_user.id)

        assert [task.description for task in result] == ["b", "c"]

    async def test_sort_and_page(self, task_repo, saved_user, tasks):
        query = TaskQuery(sort_field="description", descending=True, limit=2, offset=1)

        result = await task_repo.search(query, owner_id=saved_user.id)

        assert [task.description for task in result] == ["b", "a"]

    async def test_owner_scope(self, task_repo, saved_user, tasks):
        assert await task_repo.search(TaskQuery(), owner_id=saved_user.id + 1) == []
        assert len(await task_repo.search(TaskQuery())) == 3

    async def test_unknown_sort_field(self, task_repo, tasks):
        with pytest.raises(ValueError):
            await task_repo.search(TaskQuery(sort_field="owner_id"))
