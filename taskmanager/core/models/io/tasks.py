"""
Task I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UPDATABLE_TASK_FIELDS = ("description", "completed")

# camelCase names accepted in ``sortBy`` for compatibility with older clients
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def parse_sort_by(sort_by: str) -> tuple[str, bool]:
    """Parse a ``field[:asc|desc]`` sort expression.

    Args:
        sort_by: Expression such as ``createdAt:desc`` or ``description``

    Returns:
        ``(field_name, descending)`` with aliases resolved

    Raises:
        ValueError: If the expression is empty or the direction is unknown
    """
    field_name, _, direction = sort_by.partition(":")
    field_name = field_name.strip()
    direction = direction.strip().lower() or "asc"
    if not field_name:
        raise ValueError("sortBy must name a field")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction '{direction}'")
    return SORT_ALIASES.get(field_name, field_name), direction == "desc"


class TaskRead(BaseModel):
    """Schema for reading a task."""

    id: int
    description: str
    completed: bool
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskCreate(BaseModel):
    """Schema for creating a task. The owner is always the caller."""

    description: str = Field(description="What needs to be done")
    completed: bool = Field(default=False)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value


class TaskUpdate(BaseModel):
    """Schema for updating a task. Only the listed fields may be sent."""

    description: Optional[str] = None
    completed: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "TaskUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be null")
        return self


class DocumentUploadRead(BaseModel):
    """Result of a stored document upload."""

    filename: str
    original_filename: str
    size: int
