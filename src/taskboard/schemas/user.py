from collections.abc import Mapping
from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from src.taskboard.models import User
from src.taskboard.models.enums import UserRole
from src.taskboard.schemas.base import CamelModel, MergePatchModel


class UserRead(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    created_at: datetime


class UserRef(CamelModel):
    """Who owns, belongs to, created, was assigned or wrote something."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str

    @classmethod
    def lookup(cls, users: Mapping[UUID, User], user_id: UUID | None) -> "UserRef | None":
        user = users.get(user_id) if user_id is not None else None
        return cls.model_validate(user) if user is not None else None


class UserUpdate(MergePatchModel):
    """Admin update. Absent or empty fields keep their current value."""

    username: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    role: UserRole | None = None
    password: str | None = Field(None, max_length=100)
