"""Fixtures for Alembic migration tests."""

import os
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@pytest.fixture
def database_path(tmp_path) -> Path:
    """SQLite file the migrations run against."""
    return tmp_path / "migrations.db"


@pytest.fixture
def database_url(database_path: Path) -> str:
    return f"sqlite+aiosqlite:///{database_path}"


@pytest.fixture
def alembic_env(database_url: str) -> dict:
    """Environment for an ``alembic`` subprocess pointed at the test database."""
    return {
        **os.environ,
        "DATABASE_URL": database_url,
        "LOGFIRE_ENABLED": "false",
        "TASKMANAGER_ENABLE_FILE_LOGGING": "false",
    }
