"""
Task Service.

Task operations shared by the owner-scoped ``/tasks`` routes and the admin
routes. Passing ``owner_id=None`` lifts the ownership restriction.
"""

from __future__ import annotations

from typing import List, Optional

from taskmanager.core.database import SqlRepoBundle
from taskmanager.core.database.entities.tasks import Task
from taskmanager.core.database.repositories.tasks import TaskQuery
from taskmanager.core.errors import InvalidOperationError, NotFoundError
from taskmanager.core.models.io import TaskCreate, TaskUpdate, parse_sort_by


def build_task_query(
    completed: Optional[bool] = None,
    limit: Optional[int] = None,
    skip: Optional[int] = None,
    sort_by: Optional[str] = None,
) -> TaskQuery:
    """Turn listing query parameters into a ``TaskQuery``.

    Raises:
        InvalidOperationError: If ``sort_by`` is malformed or names an unsortable field.
    """
    sort_field, descending = None, False
    if sort_by:
        try:
            sort_field, descending = parse_sort_by(sort_by)
        except ValueError as e:
            raise InvalidOperationError(str(e)) from e
    query = TaskQuery(completed=completed, limit=limit, offset=skip, sort_field=sort_field, descending=descending)
    try:
        query.order_by()
    except ValueError as e:
        raise InvalidOperationError(str(e)) from e
    return query


class TaskService:
    """Task operations over a repository bundle."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def create(self, owner_id: int, payload: TaskCreate) -> Task:
        task = Task(description=payload.description, completed=payload.completed, owner_id=owner_id)
        return await self.repos.tasks.create(task)

    async def list(self, query: TaskQuery, owner_id: Optional[int] = None) -> List[Task]:
        return await self.repos.tasks.search(query, owner_id=owner_id)

    async def get(self, task_id: int, owner_id: Optional[int] = None) -> Task:
        """Load a task, hiding tasks that belong to someone else.

        Raises:
            NotFoundError: If the task is missing or not owned by ``owner_id``.
        """
        if owner_id is None:
            task = await self.repos.tasks.get_by_id(task_id)
        else:
            task = await self.repos.tasks.get_for_owner(task_id, owner_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def update(self, task_id: int, changes: TaskUpdate, owner_id: Optional[int] = None) -> Task:
        task = await self.get(task_id, owner_id)
        for key, value in changes.model_dump(exclude_unset=True).items():
            setattr(task, key, value)
        return await self.repos.tasks.update(task)

    async def delete(self, task_id: int, owner_id: Optional[int] = None) -> Task:
        task = await self.get(task_id, owner_id)
        return await self.repos.tasks.delete_task(task)
