"""
Centralized database layer for the task manager.

This package provides a unified location for all database entities and repositories.

Structure:
- entities/: Database entity models (users, user tokens, tasks)
- repositories/: Data access layer for each entity
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, repo bundle)
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    SqlRepoBundle,
    build_sql_repos,
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "SqlRepoBundle",
    "async_session_maker",
    "build_sql_repos",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]
