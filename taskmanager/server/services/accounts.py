"""
Account Service.

Signup, login, logout, profile updates, avatars and account deletion. Routers
call into this service; it raises domain errors and never builds HTTP
responses itself.
"""

from __future__ import annotations

from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from taskmanager.core.database import SqlRepoBundle
from taskmanager.core.database.entities.users import User
from taskmanager.core.errors import InvalidOperationError, NotFoundError
from taskmanager.core.logging_config import get_logger
from taskmanager.core.models.io import LoginRequest, UserCreate, UserUpdate
from taskmanager.core.monitoring import log_auth_event
from taskmanager.core.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)

EMAIL_TAKEN_MESSAGE = "Email is already registered"
LOGIN_FAILED_MESSAGE = "Unable to login"


class AccountService:
    """User account operations over a repository bundle."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def _issue_token(self, user: User) -> str:
        token = create_access_token(user.id)
        await self.repos.users.add_token(user.id, token)
        return token

    async def _ensure_email_free(self, email: str, current_user_id: Optional[int] = None) -> None:
        existing = await self.repos.users.get_by_email(email)
        if existing is not None and existing.id != current_user_id:
            raise InvalidOperationError(EMAIL_TAKEN_MESSAGE)

    async def signup(self, payload: UserCreate) -> Tuple[User, str]:
        """Create an account and log it in.

        Returns:
            The new user and their first access token

        Raises:
            InvalidOperationError: If the email is already registered.
        """
        await self._ensure_email_free(payload.email)
        user = User(
            name=payload.name,
            email=payload.email,
            age=payload.age,
            password_hash=hash_password(payload.password),
        )
        try:
            user = await self.repos.users.create(user)
        except IntegrityError as e:
            await self.repos.users.session.rollback()
            raise InvalidOperationError(EMAIL_TAKEN_MESSAGE) from e
        token = await self._issue_token(user)
        log_auth_event("signup", user_id=user.id, email=user.email)
        return user, token

    async def login(self, credentials: LoginRequest) -> Tuple[User, str]:
        """Verify credentials and issue a new token.

        Unknown email and wrong password fail the same way.
        """
        user = await self.repos.users.get_by_email(credentials.email)
        if user is None or not verify_password(credentials.password, user.password_hash):
            log_auth_event("login_failed", email=credentials.email.strip().lower())
            raise InvalidOperationError(LOGIN_FAILED_MESSAGE)
        token = await self._issue_token(user)
        log_auth_event("login", user_id=user.id, email=user.email)
        return user, token

    async def logout(self, user: User, token: str) -> None:
        await self.repos.users.remove_token(user.id, token)
        log_auth_event("logout", user_id=user.id)

    async def logout_all(self, user: User) -> int:
        removed = await self.repos.users.clear_tokens(user.id)
        log_auth_event("logout_all", user_id=user.id)
        return removed

    async def update_profile(self, user: User, changes: UserUpdate) -> User:
        """Apply the fields present in ``changes`` to ``user``.

        A new password is re-hashed; a new email must not belong to another user.
        """
        data = changes.model_dump(exclude_unset=True)
        if "email" in data and data["email"] != user.email:
            await self._ensure_email_free(data["email"], current_user_id=user.id)
        if "password" in data:
            user.password_hash = hash_password(data.pop("password"))
        for key, value in data.items():
            setattr(user, key, value)
        try:
            return await self.repos.users.update(user)
        except IntegrityError as e:
            await self.repos.users.session.rollback()
            raise InvalidOperationError(EMAIL_TAKEN_MESSAGE) from e

    async def set_avatar(self, user: User, data: bytes, content_type: str) -> User:
        user.avatar = data
        user.avatar_content_type = content_type
        return await self.repos.users.update(user)

    async def clear_avatar(self, user: User) -> User:
        user.avatar = None
        user.avatar_content_type = None
        return await self.repos.users.update(user)

    async def get_avatar(self, user_id: int) -> Tuple[bytes, str]:
        """Return ``(image_bytes, content_type)`` for a user's avatar.

        Raises:
            NotFoundError: If the user does not exist or has no avatar.
        """
        user = await self.repos.users.get_by_id(user_id)
        if user is None or user.avatar is None:
            raise NotFoundError("Avatar not found")
        return user.avatar, user.avatar_content_type or "application/octet-stream"

    async def get_user(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def delete_user(self, user: User) -> User:
        """Delete an account with its tasks and tokens."""
        deleted = await self.repos.users.delete_user(user)
        logger.info(f"Deleted user {deleted.id}")
        return deleted
