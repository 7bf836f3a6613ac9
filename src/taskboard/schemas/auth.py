from pydantic import Field

from src.taskboard.schemas.base import CamelModel
from src.taskboard.schemas.user import UserRead


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=100)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    # Free-form on purpose: anything other than "admin" means a regular user
    role: str | None = None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResponse(UserRead):
    """User profile plus a bearer token, returned by register and login."""

    token: str
    token_type: str = "bearer"
