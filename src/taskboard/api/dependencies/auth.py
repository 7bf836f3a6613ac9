"""Authentication and authorization dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from src.taskboard.api.dependencies.services import AuthServiceDep
from src.taskboard.core.exceptions import AppError, ForbiddenError, UnauthenticatedError
from src.taskboard.core.logging import bind_user_context
from src.taskboard.models import User


def _extract_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthenticatedError("Missing or invalid authorization header")
    token = authorization[7:].strip()
    if not token:
        raise UnauthenticatedError("Missing or invalid authorization header")
    return token


async def get_current_user(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer token and return the user it was issued to."""
    token = _extract_bearer_token(authorization)
    user = await auth_service.resolve_token(token)
    bind_user_context(user.id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_optional_user(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User | None:
    """Like get_current_user, but anonymous or invalid credentials yield None."""
    if not authorization:
        return None
    try:
        return await get_current_user(auth_service, authorization)
    except AppError:
        return None


OptionalUser = Annotated[User | None, Depends(get_optional_user)]


async def require_admin(current_user: CurrentUser) -> User:
    """Require the current user to hold the admin role."""
    if not current_user.is_admin:
        raise ForbiddenError("Admin role required for this operation")
    return current_user


AdminUser = Annotated[User, Depends(require_admin)]
