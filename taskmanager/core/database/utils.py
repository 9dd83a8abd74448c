"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines,
session factories, and repository bundles.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata (for tests/dev)
- build_sql_repos: Builds the repository bundle for one session
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base
from .repositories.tasks import TaskRepository
from .repositories.users import UserRepository


def normalize_database_url(db_url: str) -> str:
    """Rewrite sync driver URLs to their async equivalents.

    ``postgres://``, ``postgresql://`` and any ``postgresql+<driver>://`` become
    ``postgresql+asyncpg://``; a bare ``sqlite://`` becomes ``sqlite+aiosqlite://``.
    """
    url = re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)
    return re.sub(r"^sqlite://", "sqlite+aiosqlite://", url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        db_url: Database connection URL

    Returns:
        Configured AsyncEngine instance
    """
    url = normalize_database_url(db_url)
    if url.startswith("sqlite"):
        return create_async_engine(url, connect_args={"check_same_thread": False})
    return create_async_engine(url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    Args:
        engine: Async SQLAlchemy engine
    """
    # Importing the entities registers their tables on the shared metadata
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    users: UserRepository
    tasks: TaskRepository


def build_sql_repos(session: AsyncSession) -> SqlRepoBundle:
    """Build a ``SqlRepoBundle`` sharing one session.

    Args:
        session: Async session used by every repository in the bundle

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(users=UserRepository(session), tasks=TaskRepository(session))
