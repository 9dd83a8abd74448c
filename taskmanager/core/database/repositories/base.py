"""
Repository interface and query helpers.

Every repository in this package wraps one ``AsyncSession`` and one SQLModel
table (users, tasks) and exposes the same CRUD surface. Listing helpers build
``select`` statements step by step so owner scoping, completion filters,
ordering and paging compose in one place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

EntityType = TypeVar("EntityType", bound=SQLModel)

# (field name, descending) pairs, most significant first
OrderBy = Sequence[tuple[str, bool]]


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """CRUD operations shared by the user and task repositories.

    Implementations commit after each write, so a repository call is one
    transaction unless the caller batches writes on the session itself.
    """

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Insert ``entity`` and return it with its id and timestamps filled in."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Return the row with this primary key, or None."""

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Persist changes made to a loaded entity and bump ``updated_at``."""

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete by primary key. Returns False when there was nothing to delete."""

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List rows in id order, filtered by exact field matches and paged."""


class AsyncQueryBuilder:
    """Composable steps for repository ``select`` statements."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Add ``column == value`` clauses.

        ``None`` values and names that are not columns of ``model`` are skipped,
        so optional query parameters can be passed through unchanged.
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_sort(stmt, model: Type[EntityType], order_by: OrderBy):
        for field_name, descending in order_by:
            column = getattr(model, field_name)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return stmt
