"""Task schemas for API request/response."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import AliasChoices, Field, field_validator

from src.taskboard.models.enums import TaskPriority, TaskStatus
from src.taskboard.schemas.base import CamelModel, MergePatchModel, to_naive_utc
from src.taskboard.schemas.project import ProjectRef
from src.taskboard.schemas.user import UserRef

if TYPE_CHECKING:
    from src.taskboard.services.task_service import TaskDetail


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    project_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("projectId", "project_id", "project"),
    )
    description: str | None = Field(default=None, max_length=5000)
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class TaskUpdate(MergePatchModel):
    """Merge patch. The owning project cannot be changed."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class CommentCreate(CamelModel):
    text: str = Field(min_length=1, max_length=5000)


class CommentRead(CamelModel):
    id: int
    text: str
    author: UserRef | None
    created_at: datetime


class TaskRead(CamelModel):
    id: UUID
    title: str
    description: str | None
    project: ProjectRef | None
    status: str
    priority: str
    due_date: datetime | None
    assigned_to: UserRef | None
    created_by: UserRef | None
    comments: list[CommentRead]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_detail(cls, detail: "TaskDetail") -> "TaskRead":
        task, users = detail.task, detail.users
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            project=ProjectRef.model_validate(detail.project) if detail.project else None,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            assigned_to=UserRef.lookup(users, task.assigned_to),
            created_by=UserRef.lookup(users, task.created_by),
            comments=[
                CommentRead(
                    id=c.id,
                    text=c.text,
                    author=UserRef.lookup(users, c.author_id),
                    created_at=c.created_at,
                )
                for c in detail.comments
            ],
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
