"""User administration service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import DuplicateIdentityError, NotFoundError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import hash_password
from src.taskboard.core.validators import parse_object_id
from src.taskboard.models import User
from src.taskboard.models.base import touch
from src.taskboard.repositories import ProjectRepository, TaskRepository, UserRepository
from src.taskboard.schemas.user import UserUpdate
from src.taskboard.services.merge_patch import apply_merge_patch, is_blank

logger = get_logger(__name__)


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        project_repo: ProjectRepository | None = None,
        task_repo: TaskRepository | None = None,
    ):
        self.user_repo = user_repo
        self.session = session
        self.project_repo = project_repo or ProjectRepository(session)
        self.task_repo = task_repo or TaskRepository(session)

    async def get_by_id(self, user_id: str | UUID) -> User:
        """Get user by ID. Raises NotFoundError."""
        user = await self.user_repo.get_by_id(parse_object_id(user_id, "user"))
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> list[User]:
        return await self.user_repo.list_all()

    async def update(self, user_id: str | UUID, data: UserUpdate) -> User:
        """Merge-patch a user's profile."""
        user_uuid = parse_object_id(user_id, "user")
        try:
            user = await self.user_repo.get_by_id(user_uuid, for_update=True)
            if user is None:
                raise NotFoundError("User not found")

            patch = data.model_dump(exclude_unset=True)
            password = patch.pop("password", None)

            await self._ensure_identity_free(user, patch)
            changed = apply_merge_patch(user, patch)
            if not is_blank(password):
                user.hashed_password = hash_password(password)
                changed.append("password")

            touch(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateIdentityError() from e
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(user)
        logger.info("User updated", target_user_id=str(user.id), fields=changed)
        return user

    async def _ensure_identity_free(self, user: User, patch: dict) -> None:
        email = patch.get("email")
        if not is_blank(email) and email != user.email:
            if await self.user_repo.get_by_email(email) is not None:
                raise DuplicateIdentityError("Email already in use")
        username = patch.get("username")
        if not is_blank(username) and username != user.username:
            if await self.user_repo.get_by_username(username) is not None:
                raise DuplicateIdentityError("Username already in use")

    async def delete(self, user_id: str | UUID) -> None:
        """Hard-delete a user and resolve every reference to them.

        Projects the user owns are deleted together with their tasks. The user
        is removed from all other member sets, and task assignee, creator and
        comment author references to them are nulled.
        """
        user_uuid = parse_object_id(user_id, "user")
        try:
            user = await self.user_repo.get_by_id(user_uuid, for_update=True)
            if user is None:
                raise NotFoundError("User not found")

            owned = await self.project_repo.list_owned_ids(user.id)
            tasks_removed = await self.task_repo.delete_for_projects(owned)
            projects_removed = await self.project_repo.delete_by_ids(owned)
            memberships_removed = await self.project_repo.remove_user_from_all(user.id)
            await self.task_repo.detach_user(user.id)

            await self.user_repo.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "User deleted",
            target_user_id=str(user_uuid),
            projects_removed=projects_removed,
            tasks_removed=tasks_removed,
            memberships_removed=memberships_removed,
        )
