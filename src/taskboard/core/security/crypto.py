"""Cryptographic utilities - password hashing and JWT bearer tokens."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any
from uuid import UUID

import argon2
from jose import JWTError, jwt

from src.taskboard.core.config import get_settings
from src.taskboard.core.exceptions import InvalidTokenError

TOKEN_TYPE_ACCESS = "access"


@lru_cache
def _get_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _get_password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _get_password_hasher().verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


@lru_cache
def get_dummy_password_hash() -> str:
    """Hash verified against when the login email is unknown, so both paths cost the same."""
    return hash_password("dummy-password-for-timing-equalization")


def create_access_token(
    subject: str | UUID,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token for a user id."""
    settings = get_settings()

    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(days=settings.access_token_expire_days)

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "type": TOKEN_TYPE_ACCESS,
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def verify_access_token(token: str) -> UUID:
    """Return the user id carried by a valid access token.

    Raises:
        InvalidTokenError: signature invalid, token expired, wrong type or bad subject.
    """
    payload = decode_token(token)
    if payload is None:
        raise InvalidTokenError()

    if payload.get("type") != TOKEN_TYPE_ACCESS:
        raise InvalidTokenError("Invalid token type")

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Invalid token payload")

    try:
        return UUID(subject)
    except ValueError as e:
        raise InvalidTokenError("Invalid user_id in token") from e
