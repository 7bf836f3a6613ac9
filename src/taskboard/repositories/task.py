"""Repository for Task and TaskComment entities."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.taskboard.models import Task, TaskComment
from src.taskboard.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for tasks and their comment threads."""

    model = Task

    async def list_for_project(self, project_id: UUID) -> list[Task]:
        """Tasks of a project, most recently created first."""
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_assigned_to(self, user_id: UUID) -> list[Task]:
        """Tasks assigned to a user, most recently created first."""
        result = await self.session.execute(
            select(Task)
            .where(Task.assigned_to == user_id)
            .order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_comments(self, task_id: UUID) -> list[TaskComment]:
        """Comments of a task in append order."""
        result = await self.session.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def get_comments_for(self, task_ids: Iterable[UUID]) -> dict[UUID, list[TaskComment]]:
        """Comments keyed by task id, each list in append order."""
        ids = list(task_ids)
        comments: dict[UUID, list[TaskComment]] = {task_id: [] for task_id in ids}
        if not ids:
            return comments
        result = await self.session.execute(
            select(TaskComment)
            .where(TaskComment.task_id.in_(ids))  # type: ignore[attr-defined]
            .order_by(TaskComment.id)  # type: ignore[arg-type]
        )
        for comment in result.scalars().all():
            comments[comment.task_id].append(comment)
        return comments

    def add_comment(self, task_id: UUID, text: str, author_id: UUID) -> TaskComment:
        """Add comment to session (no flush/commit)."""
        comment = TaskComment(task_id=task_id, text=text, author_id=author_id)
        self.session.add(comment)
        return comment

    async def delete_with_comments(self, task: Task) -> None:
        await self.session.execute(
            delete(TaskComment).where(TaskComment.task_id == task.id)  # type: ignore[arg-type]
        )
        await self.session.delete(task)

    async def delete_for_projects(self, project_ids: list[UUID]) -> int:
        """Bulk-delete every task (and comment) belonging to the given projects."""
        if not project_ids:
            return 0
        task_ids = select(Task.id).where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
        await self.session.execute(
            delete(TaskComment).where(TaskComment.task_id.in_(task_ids))  # type: ignore[attr-defined]
        )
        result = await self.session.execute(
            delete(Task).where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0

    async def detach_user(self, user_id: UUID) -> None:
        """Null every task/comment reference to a user (assignee, creator, author)."""
        await self.session.execute(
            update(Task).where(Task.assigned_to == user_id).values(assigned_to=None)  # type: ignore[arg-type]
        )
        await self.session.execute(
            update(Task).where(Task.created_by == user_id).values(created_by=None)  # type: ignore[arg-type]
        )
        await self.session.execute(
            update(TaskComment)
            .where(TaskComment.author_id == user_id)  # type: ignore[arg-type]
            .values(author_id=None)
        )
