"""Project service - ownership, membership and the access checks tasks reuse."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import (
    DuplicateMemberError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.taskboard.core.logging import get_logger
from src.taskboard.core.validators import parse_object_id
from src.taskboard.models import Project, User
from src.taskboard.models.base import touch
from src.taskboard.repositories import ProjectRepository, TaskRepository, UserRepository
from src.taskboard.schemas.project import ProjectCreate, ProjectUpdate
from src.taskboard.services.access import ProjectAccess
from src.taskboard.services.merge_patch import apply_merge_patch

logger = get_logger(__name__)


@dataclass
class ProjectDetail:
    """A project, its member set and the users it refers to."""

    access: ProjectAccess
    users: dict[UUID, User] = field(default_factory=dict)

    @property
    def project(self) -> Project:
        return self.access.project

    @property
    def member_ids(self) -> tuple[UUID, ...]:
        return self.access.member_ids


class ProjectService:
    """Owns projects and the owner/member authorization rule.

    Every lookup checks existence first (NotFoundError) and authorization
    second (ForbiddenError).
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        task_repo: TaskRepository | None = None,
    ):
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session
        self.task_repo = task_repo or TaskRepository(session)

    async def load(self, project_id: str | UUID, for_update: bool = False) -> ProjectAccess:
        """Load a project with its member set. Raises NotFoundError."""
        project_uuid = parse_object_id(project_id, "project")
        project = await self.project_repo.get_by_id(project_uuid, for_update=for_update)
        if project is None:
            raise NotFoundError("Project not found")
        member_ids = await self.project_repo.get_member_ids(project.id)
        return ProjectAccess(project=project, member_ids=tuple(member_ids))

    async def load_accessible(
        self,
        project_id: str | UUID,
        requester_id: UUID,
        message: str = "Not authorized to access this project",
    ) -> ProjectAccess:
        """Load a project the requester owns or is a member of."""
        access = await self.load(project_id)
        if not access.can_access(requester_id):
            raise ForbiddenError(message)
        return access

    async def load_managed(
        self,
        project_id: str | UUID,
        requester_id: UUID,
        message: str = "Not authorized to modify this project",
        for_update: bool = False,
    ) -> ProjectAccess:
        """Load a project the requester owns."""
        access = await self.load(project_id, for_update=for_update)
        if not access.can_manage(requester_id):
            raise ForbiddenError(message)
        return access

    async def describe_many(self, accesses: list[ProjectAccess]) -> list[ProjectDetail]:
        """Attach the owner and member users, loaded in one query for the whole batch."""
        user_ids = {a.project.owner_id for a in accesses}
        for access in accesses:
            user_ids.update(access.member_ids)
        users = await self.user_repo.get_by_ids(user_ids)
        return [ProjectDetail(access=a, users=users) for a in accesses]

    async def describe(self, access: ProjectAccess) -> ProjectDetail:
        return (await self.describe_many([access]))[0]

    async def _validate_member_ids(self, member_ids: Iterable[UUID]) -> list[UUID]:
        """De-duplicate member ids (keeping order) and require every user to exist."""
        unique = list(dict.fromkeys(member_ids))
        existing = await self.user_repo.get_existing_ids(unique)
        missing = [str(m) for m in unique if m not in existing]
        if missing:
            raise ValidationError(f"Unknown member id(s): {', '.join(missing)}")
        return unique

    async def create(self, owner_id: UUID, data: ProjectCreate) -> ProjectDetail:
        """Create a project owned by ``owner_id``."""
        member_ids = await self._validate_member_ids(data.members or [])

        project = Project(
            name=data.name,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            owner_id=owner_id,
        )
        try:
            self.project_repo.add(project)
            await self.session.flush()
            for member_id in member_ids:
                self.project_repo.add_member(project.id, member_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(project)
        logger.info("Project created", project_id=str(project.id), members=len(member_ids))
        return await self.describe(ProjectAccess(project=project, member_ids=tuple(member_ids)))

    async def list_accessible(self, user_id: UUID) -> list[ProjectDetail]:
        """Projects the user owns or is a member of, newest first."""
        projects = await self.project_repo.list_accessible(user_id)
        members = await self.project_repo.get_member_ids_for(p.id for p in projects)
        return await self.describe_many(
            [ProjectAccess(project=p, member_ids=tuple(members[p.id])) for p in projects]
        )

    async def get(self, project_id: str | UUID, requester_id: UUID) -> ProjectDetail:
        return await self.describe(await self.load_accessible(project_id, requester_id))

    async def update(
        self, project_id: str | UUID, requester_id: UUID, data: ProjectUpdate
    ) -> ProjectDetail:
        """Merge-patch a project. A ``members`` list replaces the member set."""
        try:
            access = await self.load_managed(
                project_id,
                requester_id,
                message="Not authorized to update this project",
                for_update=True,
            )
            project = access.project

            patch = data.model_dump(exclude_unset=True)
            new_members = patch.pop("members", None)
            apply_merge_patch(project, patch)

            member_ids = list(access.member_ids)
            if new_members is not None:
                member_ids = await self._validate_member_ids(new_members)
                await self.project_repo.clear_members(project.id)
                for member_id in member_ids:
                    self.project_repo.add_member(project.id, member_id)

            touch(project)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(project)
        return await self.describe(ProjectAccess(project=project, member_ids=tuple(member_ids)))

    async def delete(self, project_id: str | UUID, requester_id: UUID) -> None:
        """Delete a project together with its tasks and memberships."""
        try:
            access = await self.load_managed(
                project_id,
                requester_id,
                message="Not authorized to delete this project",
                for_update=True,
            )
            project_ids = [access.project.id]
            tasks_removed = await self.task_repo.delete_for_projects(project_ids)
            await self.project_repo.delete_by_ids(project_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Project deleted", project_id=str(project_ids[0]), tasks_removed=tasks_removed
        )

    async def add_member(
        self, project_id: str | UUID, requester_id: UUID, user_id: str | UUID
    ) -> ProjectDetail:
        """Add a user to the member set.

        Raises:
            ForbiddenError: requester is not the owner.
            NotFoundError: project or user does not exist.
            DuplicateMemberError: user is already a member.
        """
        try:
            access = await self.load_managed(project_id, requester_id, for_update=True)
            member_uuid = parse_object_id(user_id, "user")
            if member_uuid in access.member_ids:
                raise DuplicateMemberError()
            if await self.user_repo.get_by_id(member_uuid) is None:
                raise NotFoundError("User not found")

            self.project_repo.add_member(access.project.id, member_uuid)
            touch(access.project)
            await self.session.commit()
        except IntegrityError as e:
            # Fallback in case of a concurrent add of the same member
            await self.session.rollback()
            raise DuplicateMemberError() from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Project member added",
            project_id=str(access.project.id),
            member_id=str(member_uuid),
        )
        return await self.describe(
            ProjectAccess(project=access.project, member_ids=(*access.member_ids, member_uuid))
        )

    async def remove_member(
        self, project_id: str | UUID, requester_id: UUID, user_id: str | UUID
    ) -> ProjectDetail:
        """Remove a user from the member set. Removing a non-member is a no-op."""
        try:
            access = await self.load_managed(project_id, requester_id, for_update=True)
            member_uuid = parse_object_id(user_id, "user")
            removed = await self.project_repo.remove_member(access.project.id, member_uuid)
            if removed:
                touch(access.project)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if removed:
            logger.info(
                "Project member removed",
                project_id=str(access.project.id),
                member_id=str(member_uuid),
            )
        return await self.describe(
            ProjectAccess(
                project=access.project,
                member_ids=tuple(m for m in access.member_ids if m != member_uuid),
            )
        )
