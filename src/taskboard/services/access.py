"""Project authorization model.

Every (project, user) pair resolves to exactly one ``AccessLevel``; the
owner/member predicates used by project and task operations derive from it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from src.taskboard.models import Project


class AccessLevel(str, Enum):
    OWNER = "owner"
    MEMBER = "member"
    NONE = "none"


def resolve_access(owner_id: UUID, member_ids: Iterable[UUID], user_id: UUID) -> AccessLevel:
    """Access level of ``user_id`` on a project. Ownership wins over membership."""
    if owner_id == user_id:
        return AccessLevel.OWNER
    if user_id in set(member_ids):
        return AccessLevel.MEMBER
    return AccessLevel.NONE


@dataclass(frozen=True)
class ProjectAccess:
    """A project together with its member set."""

    project: Project
    member_ids: tuple[UUID, ...] = field(default_factory=tuple)

    def level_for(self, user_id: UUID) -> AccessLevel:
        return resolve_access(self.project.owner_id, self.member_ids, user_id)

    def can_access(self, user_id: UUID) -> bool:
        """Owner or member: may read the project and read/write its tasks."""
        return self.level_for(user_id) is not AccessLevel.NONE

    def can_manage(self, user_id: UUID) -> bool:
        """Owner only: may update/delete the project, change members, delete tasks."""
        return self.level_for(user_id) is AccessLevel.OWNER
