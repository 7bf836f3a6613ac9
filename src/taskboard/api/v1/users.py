"""User administration endpoints (admin role required)."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import AdminUser, UserServiceDep
from src.taskboard.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserRead],
    responses={403: {"description": "Admin role required"}},
)
async def list_users(_admin: AdminUser, service: UserServiceDep) -> list[UserRead]:
    """List all users."""
    users = await service.list_users()
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={
        400: {"description": "Invalid user ID format"},
        403: {"description": "Admin role required"},
        404: {"description": "User not found"},
    },
)
async def get_user(user_id: str, _admin: AdminUser, service: UserServiceDep) -> UserRead:
    """Get a user by ID."""
    return UserRead.model_validate(await service.get_by_id(user_id))


@router.put(
    "/{user_id}",
    response_model=UserRead,
    responses={
        400: {"description": "Invalid ID or username/email already in use"},
        403: {"description": "Admin role required"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    user_id: str,
    data: UserUpdate,
    _admin: AdminUser,
    service: UserServiceDep,
) -> UserRead:
    """Update a user. Only supplied, non-empty fields change."""
    return UserRead.model_validate(await service.update(user_id, data))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "User deleted"},
        403: {"description": "Admin role required"},
        404: {"description": "User not found"},
    },
)
async def delete_user(user_id: str, _admin: AdminUser, service: UserServiceDep) -> None:
    """Delete a user.

    Projects they own are deleted with their tasks; other references to the
    user (memberships, assignments, authorship) are cleared.
    """
    await service.delete(user_id)
