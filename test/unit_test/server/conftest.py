from typing import AsyncGenerator, Awaitable, Callable, Dict, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from taskmanager.core.database import create_all, create_sessionmaker, get_session
from taskmanager.core.database.repositories.users import UserRepository
from taskmanager.server.core.config import settings

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

API = "/api/v1"

SignupFn = Callable[..., Awaitable[Tuple[dict, str]]]


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Write uploaded documents to a per-test directory."""
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(target))
    return target


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with the session dependency overridden."""
    from taskmanager.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def signup(client: AsyncClient) -> SignupFn:
    """Return a helper that signs up a user and returns ``(user_json, token)``."""

    async def _signup(**overrides) -> Tuple[dict, str]:
        payload = {
            "name": "Andrew",
            "email": "andrew@example.com",
            "password": "MyPass777!",
            "age": 27,
        }
        payload.update(overrides)
        response = await client.post(f"{API}/users", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]

    return _signup


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_admin(session: AsyncSession) -> Callable[[int], Awaitable[None]]:
    """Return a helper that grants admin rights to a user id."""

    async def _make_admin(user_id: int) -> None:
        repo = UserRepository(session)
        user = await repo.get_by_id(user_id)
        user.is_admin = True
        await repo.update(user)

    return _make_admin
