"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from movie_explorer.database import Database
from movie_explorer.main import app
from movie_explorer.repositories.user import UserRepository
from movie_explorer.schemas.user import UserPublic
from movie_explorer.services.cache import CacheClient
from movie_explorer.utils.security import create_access_token

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "securepassword123"
TEST_NAME = "Test User"


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """A fresh in-memory SQLite database per test."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession]:
    async with database.session() as session:
        yield session


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints.

    The app is wired to the test database and a disabled cache, the way the
    lifespan would wire the real ones.
    """
    app.state.database = database
    app.state.cache = CacheClient(None)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    del app.state.database
    del app.state.cache


@pytest.fixture
async def test_user(database: Database) -> UserPublic:
    """A committed user with a local password."""
    async with database.session() as session:
        user = await UserRepository(session).create(TEST_EMAIL, TEST_PASSWORD, TEST_NAME)
        await session.commit()
    return user


@pytest.fixture
def auth_headers(test_user: UserPublic) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(test_user)}"}
