"""Security utilities.

Re-exports the credential functions for convenience.
"""

from src.taskboard.core.security.crypto import (
    TOKEN_TYPE_ACCESS,
    create_access_token,
    decode_token,
    get_dummy_password_hash,
    hash_password,
    verify_access_token,
    verify_password,
)

__all__ = [
    "TOKEN_TYPE_ACCESS",
    "create_access_token",
    "decode_token",
    "get_dummy_password_hash",
    "hash_password",
    "verify_access_token",
    "verify_password",
]
