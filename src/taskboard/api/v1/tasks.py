"""Task endpoints - authorized through the parent project."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentUser, TaskServiceDep
from src.taskboard.schemas.task import CommentCreate, TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "/project/{project_id}",
    response_model=list[TaskRead],
    summary="List project tasks",
    description="Tasks of a project, newest first. Owner or member only.",
)
async def list_project_tasks(
    project_id: str, user: CurrentUser, service: TaskServiceDep
) -> list[TaskRead]:
    tasks = await service.list_for_project(project_id, user.id)
    return [TaskRead.from_detail(t) for t in tasks]


@router.get(
    "/my-tasks",
    response_model=list[TaskRead],
    summary="List my tasks",
    description="Tasks assigned to the current user, newest first.",
)
async def list_my_tasks(user: CurrentUser, service: TaskServiceDep) -> list[TaskRead]:
    tasks = await service.list_for_user(user.id)
    return [TaskRead.from_detail(t) for t in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get task",
    responses={
        403: {"description": "Not the project owner or a member"},
        404: {"description": "Task not found"},
    },
)
async def get_task(task_id: str, user: CurrentUser, service: TaskServiceDep) -> TaskRead:
    return TaskRead.from_detail(await service.get(task_id, user.id))


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses={
        403: {"description": "Not the project owner or a member"},
        404: {"description": "Project not found"},
    },
)
async def create_task(data: TaskCreate, user: CurrentUser, service: TaskServiceDep) -> TaskRead:
    return TaskRead.from_detail(await service.create(user.id, data))


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    description="Owner or member. Supplied non-empty fields change.",
    responses={
        403: {"description": "Not the project owner or a member"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    user: CurrentUser,
    service: TaskServiceDep,
) -> TaskRead:
    return TaskRead.from_detail(await service.update(task_id, user.id, data))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
    description="Project owner only, regardless of who created the task.",
    responses={
        403: {"description": "Not the project owner"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(task_id: str, user: CurrentUser, service: TaskServiceDep) -> None:
    await service.delete(task_id, user.id)


@router.post(
    "/{task_id}/comments",
    response_model=TaskRead,
    summary="Add comment",
    responses={
        403: {"description": "Not the project owner or a member"},
        404: {"description": "Task not found"},
    },
)
async def add_comment(
    task_id: str,
    data: CommentCreate,
    user: CurrentUser,
    service: TaskServiceDep,
) -> TaskRead:
    return TaskRead.from_detail(await service.add_comment(task_id, user.id, data.text))
