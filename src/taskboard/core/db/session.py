"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.taskboard.core.db.engine import get_engine

# (engine, factory) for the most recently used engine
_cached: tuple[AsyncEngine, async_sessionmaker[AsyncSession]] | None = None


def _session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    global _cached
    if _cached is None or _cached[0] is not engine:
        factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        _cached = (engine, factory)
    return _cached[1]


@asynccontextmanager
async def get_session(
    engine: AsyncEngine | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Open a session on ``engine`` (the application engine by default).

    Loaded rows stay readable after commit so routes can serialize them.
    Services own commit and rollback.
    """
    async with _session_factory(engine or get_engine())() as session:
        yield session
