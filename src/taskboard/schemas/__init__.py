from src.taskboard.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from src.taskboard.schemas.base import CamelModel, MergePatchModel
from src.taskboard.schemas.project import (
    MemberAdd,
    ProjectCreate,
    ProjectRead,
    ProjectRef,
    ProjectUpdate,
)
from src.taskboard.schemas.task import (
    CommentCreate,
    CommentRead,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from src.taskboard.schemas.user import UserRead, UserRef, UserUpdate

__all__ = [
    "AuthResponse",
    "CamelModel",
    "CommentCreate",
    "CommentRead",
    "LoginRequest",
    "MemberAdd",
    "MergePatchModel",
    "ProjectCreate",
    "ProjectRead",
    "ProjectRef",
    "ProjectUpdate",
    "RegisterRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UserRead",
    "UserRef",
    "UserUpdate",
]
