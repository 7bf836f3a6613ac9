"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.db import DBSession
from src.taskboard.api.dependencies.repositories import ProjectRepo, TaskRepo, UserRepo
from src.taskboard.services import AuthService, ProjectService, TaskService, UserService


def get_auth_service(user_repo: UserRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, session)


def get_user_service(
    user_repo: UserRepo,
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> UserService:
    return UserService(user_repo, session, project_repo, task_repo)


def get_project_service(
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, user_repo, session, task_repo)


def get_task_service(
    task_repo: TaskRepo,
    user_repo: UserRepo,
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    session: DBSession,
) -> TaskService:
    """Task service sharing the request's project service for authorization."""
    return TaskService(task_repo, user_repo, project_service, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
