"""Root test fixtures shared across all test types.

Environment variables are set before any application import so the cached
settings pick them up. Integration fixtures live in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
# Cheap hashing keeps the suite fast; production defaults are much higher
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ADMIN_SELF_REGISTRATION", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator

import pytest

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_log_context() -> Generator[None]:
    """Keep structlog contextvars from leaking between tests."""
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def settings_override(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch]:
    """Set env vars for a single test, then restore the cached settings.

    Usage:
        settings_override.setenv("ADMIN_SELF_REGISTRATION", "true")
        get_settings.cache_clear()
    """
    yield monkeypatch
    monkeypatch.undo()
    get_settings.cache_clear()
