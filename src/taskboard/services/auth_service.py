"""Authentication service - registration, login and bearer-token resolution."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.config import get_settings
from src.taskboard.core.exceptions import (
    DuplicateIdentityError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import (
    create_access_token,
    get_dummy_password_hash,
    hash_password,
    verify_access_token,
    verify_password,
)
from src.taskboard.models import User, UserRole
from src.taskboard.repositories import UserRepository
from src.taskboard.schemas.auth import AuthResponse, RegisterRequest
from src.taskboard.schemas.user import UserRead

logger = get_logger(__name__)


class AuthService:
    """Authentication service - handles registration, login and token lookup."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    def _resolve_role(self, requested: str | None, requested_by: User | None) -> str:
        """Role for a new account.

        Only the exact value "admin" asks for elevation. Unless self-registration
        of admins is enabled, an existing admin must be making the request.
        """
        if requested != UserRole.ADMIN.value:
            return UserRole.USER.value

        settings = get_settings()
        if settings.admin_self_registration:
            return UserRole.ADMIN.value
        if requested_by is not None and requested_by.is_admin:
            return UserRole.ADMIN.value
        raise ForbiddenError("Only an administrator can register an admin account")

    async def register(
        self,
        data: RegisterRequest,
        requested_by: User | None = None,
    ) -> User:
        """Create a user account.

        Raises:
            DuplicateIdentityError: email or username already taken.
            ForbiddenError: admin role requested without permission.
        """
        existing = await self.user_repo.find_by_email_or_username(data.email, data.username)
        if existing is not None:
            raise DuplicateIdentityError()

        user = User(
            username=data.username,
            email=data.email,
            hashed_password=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=self._resolve_role(data.role, requested_by),
        )
        self.user_repo.add(user)

        try:
            await self.session.commit()
        except IntegrityError as e:
            # Fallback in case of a concurrent registration with the same identity
            await self.session.rollback()
            raise DuplicateIdentityError() from e
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user whose credentials match.

        Raises:
            InvalidCredentialsError: unknown email or wrong password.
        """
        user = await self.user_repo.get_by_email(email)

        # Always verify a hash so unknown emails take as long as wrong passwords
        password_hash = user.hashed_password if user else get_dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        return user

    def issue_token(self, user: User) -> AuthResponse:
        """Build the register/login response: profile plus bearer token."""
        profile = UserRead.model_validate(user)
        return AuthResponse(**profile.model_dump(), token=create_access_token(user.id))

    async def resolve_token(self, token: str) -> User:
        """Return the user a bearer token was issued to.

        Raises:
            InvalidTokenError: bad signature, expired, or the user no longer exists.
        """
        user_id = verify_access_token(token)
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise InvalidTokenError("User not found")
        return user
