"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer with
in-memory SQLite.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from taskmanager.core.database import create_all, create_sessionmaker
from taskmanager.core.database.entities.users import User
from taskmanager.core.database.repositories.tasks import TaskRepository
from taskmanager.core.database.repositories.users import UserRepository


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture
def user_repo(in_memory_session) -> UserRepository:
    return UserRepository(in_memory_session)


@pytest.fixture
def task_repo(in_memory_session) -> TaskRepository:
    return TaskRepository(in_memory_session)


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "name": "Andrew",
        "email": "andrew@example.com",
        "age": 27,
        "password_hash": "$2b$04$notarealhashnotarealhashnotarealhashnotarealhashnot",
    }


@pytest.fixture
async def saved_user(user_repo, sample_user_data) -> User:
    return await user_repo.create(User(**sample_user_data))
