"""Repository for Project and ProjectMember entities."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import select

from src.taskboard.models import Project, ProjectMember
from src.taskboard.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for projects and their member sets."""

    model = Project

    async def list_accessible(self, user_id: UUID) -> list[Project]:
        """List projects the user owns or is a member of, newest first."""
        member_of = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        result = await self.session.execute(
            select(Project)
            .where(or_(Project.owner_id == user_id, Project.id.in_(member_of)))  # type: ignore[attr-defined]
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_by_ids(self, ids: Iterable[UUID]) -> dict[UUID, Project]:
        """Projects keyed by id. Unknown ids are left out."""
        wanted = set(ids)
        if not wanted:
            return {}
        result = await self.session.execute(
            select(Project).where(Project.id.in_(wanted))  # type: ignore[attr-defined]
        )
        return {project.id: project for project in result.scalars().all()}

    async def list_owned_ids(self, user_id: UUID) -> list[UUID]:
        result = await self.session.execute(select(Project.id).where(Project.owner_id == user_id))
        return list(result.scalars().all())

    async def get_member_ids(self, project_id: UUID) -> list[UUID]:
        """Member ids in the order they joined."""
        result = await self.session.execute(
            select(ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.created_at)
        )
        return list(result.scalars().all())

    async def get_member_ids_for(self, project_ids: Iterable[UUID]) -> dict[UUID, list[UUID]]:
        """Member ids keyed by project id, for a batch of projects."""
        ids = list(project_ids)
        members: dict[UUID, list[UUID]] = {project_id: [] for project_id in ids}
        if not ids:
            return members
        result = await self.session.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id.in_(ids))  # type: ignore[attr-defined]
            .order_by(ProjectMember.created_at)
        )
        for row in result.scalars().all():
            members[row.project_id].append(row.user_id)
        return members

    def add_member(self, project_id: UUID, user_id: UUID) -> ProjectMember:
        """Add membership row to session (no flush/commit)."""
        membership = ProjectMember(project_id=project_id, user_id=user_id)
        self.session.add(membership)
        return membership

    async def remove_member(self, project_id: UUID, user_id: UUID) -> int:
        """Delete a membership row. Returns the number of rows removed (0 or 1)."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,  # type: ignore[arg-type]
                ProjectMember.user_id == user_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0

    async def clear_members(self, project_id: UUID) -> None:
        await self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project_id)  # type: ignore[arg-type]
        )

    async def remove_user_from_all(self, user_id: UUID) -> int:
        """Drop the user from every project's member set."""
        result = await self.session.execute(
            delete(ProjectMember).where(ProjectMember.user_id == user_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0

    async def delete_by_ids(self, project_ids: list[UUID]) -> int:
        """Bulk-delete projects and their membership rows. Tasks are not touched."""
        if not project_ids:
            return 0
        await self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )
        result = await self.session.execute(
            delete(Project).where(Project.id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return result.rowcount or 0
