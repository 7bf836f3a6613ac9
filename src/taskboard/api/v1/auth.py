"""Authentication endpoints - register, login, profile."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import AuthServiceDep, CurrentUser, OptionalUser
from src.taskboard.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from src.taskboard.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "User registered",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "username": "jdoe",
                        "email": "jdoe@example.com",
                        "firstName": "John",
                        "lastName": "Doe",
                        "role": "user",
                        "createdAt": "2024-01-15T10:30:00",
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "tokenType": "bearer",
                    }
                }
            },
        },
        400: {"description": "User already exists"},
        403: {"description": "Admin role requested without permission"},
    },
)
async def register(
    register_data: RegisterRequest,
    service: AuthServiceDep,
    requested_by: OptionalUser,
) -> AuthResponse:
    """Register a new user and return a bearer token.

    Requesting role "admin" needs an admin's bearer token unless
    ADMIN_SELF_REGISTRATION is enabled.
    """
    user = await service.register(register_data, requested_by=requested_by)
    return service.issue_token(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "Successful authentication"},
        401: {"description": "Invalid email or password"},
    },
)
async def login(login_data: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    """Authenticate with email and password."""
    user = await service.authenticate(login_data.email, login_data.password)
    return service.issue_token(user)


@router.get(
    "/profile",
    response_model=UserRead,
    responses={
        200: {"description": "Current user profile"},
        401: {"description": "Not authenticated"},
    },
)
async def get_profile(current_user: CurrentUser) -> UserRead:
    """Get the authenticated user's profile."""
    return UserRead.model_validate(current_user)
