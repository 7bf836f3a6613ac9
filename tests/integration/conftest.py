"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh in-memory SQLite database. The app's session
dependency is overridden to use it, so HTTP requests and direct session
work see the same data.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.taskboard import models  # noqa: F401 - registers tables on the metadata
from src.taskboard.api.dependencies import get_db_session
from src.taskboard.core import db
from src.taskboard.core.db import get_session
from src.taskboard.main import create_app
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import login


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test engine with all tables."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for service-level tests.

    Tests must explicitly call `await session.commit()` to persist changes.
    Don't combine with `client` in one test; the in-memory database has a
    single shared connection.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def app(engine: AsyncEngine) -> AsyncGenerator[FastAPI]:
    """Application with the session dependency bound to the test engine.

    Only /health talks to the global engine; it is disposed after each test.
    """
    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _override_session
    yield application

    application.dependency_overrides.clear()
    await db.dispose_engine()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create test client driving the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def test_admin(engine: AsyncEngine) -> dict:
    """Create an admin directly in the database (registration can't grant admin)."""
    user = UserFactory.admin()
    async with get_session(engine) as session:
        session.add(user)
        await session.commit()

    return {
        "id": str(user.id),
        "email": user.email,
        "password": DEFAULT_TEST_PASSWORD,
    }


@pytest.fixture
async def admin_headers(client: AsyncClient, test_admin: dict) -> dict[str, str]:
    """Authorization header for the test admin."""
    return await login(client, test_admin["email"], test_admin["password"])
