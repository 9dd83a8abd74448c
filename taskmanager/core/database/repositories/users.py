"""
User repository implementation.

This module provides data access operations for user accounts and their
access tokens. Deleting a user also deletes the user's tasks and tokens in the
same transaction.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import delete as sql_delete
from sqlmodel import select

from ..base import utc_now
from ..entities.tasks import Task
from ..entities.users import User, UserToken
from .base import AsyncBaseRepository, AsyncQueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user and token data access operations using SQLModel."""

    def __init__(self, session) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User SQLModel instance with the password already hashed

        Returns:
            Persisted User with generated fields
        """
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address (compared lowercased)."""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token(self, user_id: int, token: str) -> Optional[User]:
        """Get a user only if the token is still registered to them.

        Args:
            user_id: User ID taken from the token's subject
            token: The raw token string

        Returns:
            User instance or None when the user is gone or the token was revoked
        """
        stmt = (
            select(User)
            .join(UserToken, UserToken.user_id == User.id)
            .where(User.id == user_id, UserToken.token == token)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update(self, user: User) -> User:
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def delete(self, user_id: int) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        await self.delete_user(user)
        return True

    async def delete_user(self, user: User) -> User:
        """Delete a loaded user together with their tasks and tokens.

        Returns:
            The deleted user
        """
        await self.session.execute(sql_delete(Task).where(Task.owner_id == user.id))
        await self.session.execute(sql_delete(UserToken).where(UserToken.user_id == user.id))
        await self.session.delete(user)
        await self.session.commit()
        return user

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[User]:
        stmt = select(User)
        if filters:
            stmt = AsyncQueryBuilder.apply_filters(stmt, User, filters)
        stmt = stmt.order_by(User.id)
        stmt = AsyncQueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    async def add_token(self, user_id: int, token: str) -> UserToken:
        """Register a newly issued token for a user."""
        record = UserToken(user_id=user_id, token=token)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        return record

    async def list_tokens(self, user_id: int) -> List[str]:
        stmt = select(UserToken.token).where(UserToken.user_id == user_id).order_by(UserToken.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def remove_token(self, user_id: int, token: str) -> bool:
        """Revoke one token. Returns True if it was registered."""
        result = await self.session.execute(
            sql_delete(UserToken).where(UserToken.user_id == user_id, UserToken.token == token)
        )
        await self.session.commit()
        return bool(result.rowcount)

    async def clear_tokens(self, user_id: int) -> int:
        """Revoke every token of a user. Returns how many were removed."""
        result = await self.session.execute(sql_delete(UserToken).where(UserToken.user_id == user_id))
        await self.session.commit()
        return result.rowcount or 0
