"""Model exports.

Import from here: `from src.taskboard.models import User, Project`
"""

from src.taskboard.models.enums import ProjectStatus, TaskPriority, TaskStatus, UserRole
from src.taskboard.models.project import Project, ProjectMember
from src.taskboard.models.task import Task, TaskComment
from src.taskboard.models.user import User

__all__ = [
    # Enums
    "ProjectStatus",
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    # Models
    "Project",
    "ProjectMember",
    "Task",
    "TaskComment",
    "User",
]
