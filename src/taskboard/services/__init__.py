from src.taskboard.services.access import AccessLevel, ProjectAccess, resolve_access
from src.taskboard.services.auth_service import AuthService
from src.taskboard.services.project_service import ProjectDetail, ProjectService
from src.taskboard.services.task_service import TaskDetail, TaskService
from src.taskboard.services.user_service import UserService

__all__ = [
    "AccessLevel",
    "AuthService",
    "ProjectAccess",
    "ProjectDetail",
    "ProjectService",
    "TaskDetail",
    "TaskService",
    "UserService",
    "resolve_access",
]
