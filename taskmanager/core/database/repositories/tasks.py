"""
Task repository implementation.

This module provides data access operations for tasks, including the
owner-scoped lookups used by regular users and the unscoped ones used by
admins. Listing supports completion filtering, sorting and pagination.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlmodel import select

from ..base import utc_now
from ..entities.tasks import Task
from .base import AsyncBaseRepository, AsyncQueryBuilder

SORTABLE_FIELDS = ("created_at", "updated_at", "description", "completed")


@dataclass(frozen=True)
class TaskQuery:
    """Filtering, ordering and paging options for task listings."""

    completed: Optional[bool] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    sort_field: Optional[str] = None
    descending: bool = False

    def order_by(self) -> list[tuple[str, bool]]:
        # Primary key breaks ties so pages stay stable
        if self.sort_field is None:
            return [("id", False)]
        if self.sort_field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort tasks by '{self.sort_field}'")
        return [(self.sort_field, self.descending), ("id", self.descending)]


class TaskRepository(AsyncBaseRepository[Task]):
    """Repository for task data access operations using SQLModel."""

    def __init__(self, session) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        super().__init__(session, Task)

    async def create(self, task: Task) -> Task:
        """Create a new task.

        Args:
            task: Task SQLModel instance with ``owner_id`` set

        Returns:
            Persisted Task with generated fields
        """
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        return task

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        stmt = select(Task).where(Task.id == task_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_owner(self, task_id: int, owner_id: int) -> Optional[Task]:
        """Get a task only if it belongs to the given owner.

        Args:
            task_id: Task ID
            owner_id: Owning user's ID

        Returns:
            Task instance or None when missing or owned by someone else
        """
        stmt = select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, task: Task) -> Task:
        task.updated_at = utc_now()
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        return task

    async def delete(self, task_id: int) -> bool:
        task = await self.get_by_id(task_id)
        if task is None:
            return False
        await self.session.delete(task)
        await self.session.commit()
        return True

    async def delete_task(self, task: Task) -> Task:
        """Delete an already loaded task and return it."""
        await self.session.delete(task)
        await self.session.commit()
        return task

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Task]:
        stmt = select(Task)
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, Task, filters)
        stmt = stmt.order_by(Task.id)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, query: TaskQuery, owner_id: Optional[int] = None) -> List[Task]:
        """List tasks matching a query, optionally scoped to one owner.

        Args:
            query: Completion filter, ordering and paging options
            owner_id: Restrict to this owner's tasks; ``None`` searches all owners

        Returns:
            List of matching tasks in the requested order

        Raises:
            ValueError: If the query asks to sort by an unsupported field
        """
        order_by = query.order_by()
        stmt = select(Task)
        stmt = AsyncQueryBuilder.apply_filters(stmt, Task, {"owner_id": owner_id, "completed": query.completed})
        stmt = AsyncQueryBuilder.apply_sort(stmt, Task, order_by)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, query.limit, query.offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
