"""Task and task comment models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    """Task scoped to a project. ``project_id`` never changes after creation."""

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    status: str = Field(default=TaskStatus.PENDING.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    due_date: datetime | None = Field(default=None)
    assigned_to: UUID | None = Field(default=None, foreign_key="users.id", index=True)
    # Nulled when the creating user is deleted
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class TaskComment(SQLModel, table=True):
    """Comment on a task. Append-only; the integer id gives append order."""

    __tablename__ = "task_comments"

    id: int | None = Field(default=None, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    text: str = Field(max_length=5000)
    author_id: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
