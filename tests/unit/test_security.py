"""Tests for password hashing, bearer tokens and security-related settings."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import ValidationError

from src.taskboard.api.middlewares.security_headers import DOCS_CSP, build_security_headers
from src.taskboard.core.config import Settings, get_settings
from src.taskboard.core.exceptions import InvalidTokenError
from src.taskboard.core.security import (
    create_access_token,
    decode_token,
    get_dummy_password_hash,
    hash_password,
    verify_access_token,
    verify_password,
)

pytestmark = pytest.mark.unit

VALID_SECRET = "x" * 32


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$argon2id$")

    def test_verify_roundtrip(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_verify_garbage_hash_returns_false(self):
        assert verify_password("anything", "not-an-argon2-hash") is False

    def test_dummy_hash_never_matches_user_passwords(self):
        assert not verify_password("testpassword123", get_dummy_password_hash())


class TestAccessTokens:
    def test_token_carries_user_id(self):
        user_id = uuid4()
        token = create_access_token(user_id)
        assert verify_access_token(token) == user_id

    def test_default_expiry_is_thirty_days(self):
        token = create_access_token(uuid4())
        claims = jwt.get_unverified_claims(token)
        assert claims["type"] == "access"
        # exp is an integer epoch; allow a little clock slack
        issued_window = timedelta(days=30).total_seconds()
        assert issued_window - 60 < claims["exp"] - datetime.now(UTC).timestamp() <= issued_window

    def test_expired_token_rejected(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None
        with pytest.raises(InvalidTokenError):
            verify_access_token(token)

    def test_tampered_token_rejected(self):
        token = create_access_token(uuid4())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidTokenError):
            verify_access_token(tampered)

    def test_token_signed_with_other_key_rejected(self):
        settings = get_settings()
        forged = jwt.encode(
            {"sub": str(uuid4()), "type": "access"},
            "another-secret-that-is-long-enough-123",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            verify_access_token(forged)

    def test_wrong_token_type_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "refresh"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError, match="Invalid token type"):
            verify_access_token(token)

    def test_non_uuid_subject_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "not-a-uuid", "type": "access"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError, match="Invalid user_id"):
            verify_access_token(token)


class TestSettingsValidation:
    def test_short_jwt_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            Settings(database_url="sqlite+aiosqlite://", jwt_secret_key="short")

    def test_placeholder_jwt_secret_rejected(self):
        with pytest.raises(ValidationError, match="must be changed"):
            Settings(
                database_url="sqlite+aiosqlite://",
                jwt_secret_key="change-this-to-a-secure-random-string",
            )

    def test_cors_wildcard_rejected(self):
        with pytest.raises(ValidationError, match="wildcard"):
            Settings(
                database_url="sqlite+aiosqlite://",
                jwt_secret_key=VALID_SECRET,
                cors_origins=["*"],
            )

    def test_admin_self_registration_off_by_default(self):
        settings = Settings(database_url="sqlite+aiosqlite://", jwt_secret_key=VALID_SECRET)
        assert settings.admin_self_registration is False
        assert settings.access_token_expire_days == 30
        assert settings.is_sqlite


class TestSecurityHeaders:
    def test_docs_enabled_uses_swagger_csp(self):
        settings = Settings(
            database_url="sqlite+aiosqlite://", jwt_secret_key=VALID_SECRET, enable_openapi=True
        )
        headers = build_security_headers(settings)
        assert headers["Content-Security-Policy"] == DOCS_CSP
        assert "Strict-Transport-Security" not in headers

    def test_production_gets_strict_csp_and_hsts(self):
        settings = Settings(
            database_url="sqlite+aiosqlite://",
            jwt_secret_key=VALID_SECRET,
            app_env="production",
            enable_openapi=False,
        )
        headers = build_security_headers(settings)
        assert headers["Content-Security-Policy"] == settings.csp_production
        assert headers["Strict-Transport-Security"].startswith("max-age=")

    def test_empty_production_csp_omits_header(self):
        settings = Settings(
            database_url="sqlite+aiosqlite://",
            jwt_secret_key=VALID_SECRET,
            enable_openapi=False,
            csp_production="",
        )
        assert "Content-Security-Policy" not in build_security_headers(settings)
