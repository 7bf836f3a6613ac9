"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

from src.taskboard.api.dependencies.auth import (
    AdminUser,
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_optional_user,
    require_admin,
)
from src.taskboard.api.dependencies.db import DBSession, get_db_session
from src.taskboard.api.dependencies.repositories import (
    ProjectRepo,
    TaskRepo,
    UserRepo,
    get_project_repository,
    get_task_repository,
    get_user_repository,
)
from src.taskboard.api.dependencies.services import (
    AuthServiceDep,
    ProjectServiceDep,
    TaskServiceDep,
    UserServiceDep,
    get_auth_service,
    get_project_service,
    get_task_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminUser",
    "CurrentUser",
    "OptionalUser",
    "get_current_user",
    "get_optional_user",
    "require_admin",
    # Repositories
    "ProjectRepo",
    "TaskRepo",
    "UserRepo",
    "get_project_repository",
    "get_task_repository",
    "get_user_repository",
    # Services
    "AuthServiceDep",
    "ProjectServiceDep",
    "TaskServiceDep",
    "UserServiceDep",
    "get_auth_service",
    "get_project_service",
    "get_task_service",
    "get_user_service",
]
