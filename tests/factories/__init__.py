"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import ProjectFactory, ProjectMemberFactory
from tests.factories.task import TaskCommentFactory, TaskFactory
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # User
    "UserFactory",
    "DEFAULT_TEST_PASSWORD",
    # Project
    "ProjectFactory",
    "ProjectMemberFactory",
    # Task
    "TaskFactory",
    "TaskCommentFactory",
]
