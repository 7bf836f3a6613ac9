"""Project endpoints - ownership and membership enforced per request."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentUser, ProjectServiceDep
from src.taskboard.schemas.project import MemberAdd, ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List projects the current user owns or is a member of.",
)
async def list_projects(user: CurrentUser, service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_accessible(user.id)
    return [ProjectRead.from_detail(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project owned by the current user.",
    responses={400: {"description": "Unknown member id"}},
)
async def create_project(
    data: ProjectCreate, user: CurrentUser, service: ProjectServiceDep
) -> ProjectRead:
    return ProjectRead.from_detail(await service.create(user.id, data))


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        400: {"description": "Invalid project ID format"},
        403: {"description": "Not the owner or a member"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: str, user: CurrentUser, service: ProjectServiceDep
) -> ProjectRead:
    return ProjectRead.from_detail(await service.get(project_id, user.id))


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Owner only. Supplied non-empty fields change; `members` replaces the set.",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectRead:
    return ProjectRead.from_detail(await service.update(project_id, user.id, data))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Owner only. Deletes the project's tasks as well.",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: str, user: CurrentUser, service: ProjectServiceDep) -> None:
    await service.delete(project_id, user.id)


@router.post(
    "/{project_id}/members",
    response_model=ProjectRead,
    summary="Add project member",
    responses={
        400: {"description": "User is already a member"},
        403: {"description": "Not the owner"},
        404: {"description": "Project or user not found"},
    },
)
async def add_member(
    project_id: str,
    data: MemberAdd,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectRead:
    return ProjectRead.from_detail(await service.add_member(project_id, user.id, data.user_id))


@router.delete(
    "/{project_id}/members/{user_id}",
    response_model=ProjectRead,
    summary="Remove project member",
    description="Owner only. Removing a user who is not a member is a no-op.",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Project not found"},
    },
)
async def remove_member(
    project_id: str,
    user_id: str,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectRead:
    return ProjectRead.from_detail(await service.remove_member(project_id, user.id, user_id))
