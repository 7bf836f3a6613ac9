"""Repository for User entity."""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select

from src.taskboard.models import User
from src.taskboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (exact match)."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Get any user holding either identity."""
        result = await self.session.execute(
            select(User).where(or_(User.email == email, User.username == username)).limit(1)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def get_existing_ids(self, ids: Sequence[UUID]) -> set[UUID]:
        """Return the subset of ``ids`` that belong to existing users."""
        if not ids:
            return set()
        result = await self.session.execute(select(User.id).where(User.id.in_(ids)))  # type: ignore[attr-defined]
        return set(result.scalars().all())

    async def get_by_ids(self, ids: Iterable[UUID]) -> dict[UUID, User]:
        """Users keyed by id. Unknown ids are left out."""
        wanted = set(ids)
        if not wanted:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(wanted)))  # type: ignore[attr-defined]
        return {user.id: user for user in result.scalars().all()}
