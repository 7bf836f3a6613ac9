"""Project schemas for API request/response."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from src.taskboard.models.enums import ProjectStatus
from src.taskboard.schemas.base import CamelModel, MergePatchModel, to_naive_utc
from src.taskboard.schemas.user import UserRef

if TYPE_CHECKING:
    from src.taskboard.services.project_service import ProjectDetail


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime | None = None
    end_date: datetime | None = None
    members: list[UUID] | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class ProjectUpdate(MergePatchModel):
    """Merge patch. ``members``, when present, replaces the whole member set."""

    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: ProjectStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    members: list[UUID] | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class MemberAdd(CamelModel):
    user_id: str = Field(min_length=1)


class ProjectRef(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class ProjectRead(CamelModel):
    id: UUID
    name: str
    description: str | None
    owner: UserRef | None
    members: list[UserRef]
    status: str
    start_date: datetime | None
    end_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_detail(cls, detail: "ProjectDetail") -> "ProjectRead":
        project = detail.project
        members = (UserRef.lookup(detail.users, m) for m in detail.member_ids)
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            owner=UserRef.lookup(detail.users, project.owner_id),
            members=[m for m in members if m is not None],
            status=project.status,
            start_date=project.start_date,
            end_date=project.end_date,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
