"""
User entity models.

This module contains the database entities for user accounts and the
session tokens issued to them. A user may hold several tokens at once (one per
login); logging out removes a single token, logging out everywhere removes all
of them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field

from ..base import Base, utc_now


class UserBase(Base):
    """Base fields for a user account."""

    name: str = Field(description="Display name")
    email: str = Field(unique=True, index=True, max_length=320, description="Lowercased login email")
    age: int = Field(default=0, ge=0, description="Age in years")
    is_admin: bool = Field(default=False, description="Whether the user may use admin routes")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(description="bcrypt hash of the password")

    avatar: Optional[bytes] = Field(default=None, sa_column=Column(LargeBinary, nullable=True))
    avatar_content_type: Optional[str] = Field(default=None, max_length=64)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def has_avatar(self) -> bool:
        return self.avatar is not None

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, is_admin={self.is_admin})"


class UserToken(Base, table=True):
    """Access token currently valid for a user.

    Table: user_tokens
    """

    __tablename__ = "user_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    token: str = Field(index=True, max_length=512)
    created_at: datetime = Field(default_factory=utc_now)
