"""
Task entity model.

A task belongs to exactly one user (its owner). Tasks are removed together
with their owner.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class TaskBase(Base):
    """Base fields for a task."""

    description: str = Field(description="What needs to be done")
    completed: bool = Field(default=False, description="Whether the task is done")


class Task(TaskBase, table=True):
    """Persistent task owned by a user.

    Table: tasks
    """

    __tablename__ = "tasks"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Task(id={self.id}, owner_id={self.owner_id}, completed={self.completed})"
