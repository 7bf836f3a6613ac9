"""Project and project membership models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Project owned by a single user. Members live in ``project_members``."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    start_date: datetime | None = Field(default=None)
    end_date: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Junction table for project membership (owner is not listed here)."""

    __tablename__ = "project_members"

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
