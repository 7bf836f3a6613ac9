"""Task service - tasks and their comment threads, authorized through the parent project."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.validators import parse_object_id
from src.taskboard.models import Project, Task, TaskComment, TaskPriority, TaskStatus, User
from src.taskboard.models.base import touch
from src.taskboard.repositories import TaskRepository, UserRepository
from src.taskboard.schemas.task import TaskCreate, TaskUpdate
from src.taskboard.services.access import ProjectAccess
from src.taskboard.services.merge_patch import apply_merge_patch, is_blank
from src.taskboard.services.project_service import ProjectService

logger = get_logger(__name__)


@dataclass
class TaskDetail:
    """A task with its comments in append order, its project and the users it refers to."""

    task: Task
    project: Project | None = None
    comments: list[TaskComment] = field(default_factory=list)
    users: dict[UUID, User] = field(default_factory=dict)


class TaskService:
    """Task operations. Authorization is always decided on the parent project."""

    def __init__(
        self,
        task_repo: TaskRepository,
        user_repo: UserRepository,
        project_service: ProjectService,
        session: AsyncSession,
    ):
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.project_service = project_service
        self.session = session

    async def _load_task(self, task_id: str | UUID, for_update: bool = False) -> Task:
        task = await self.task_repo.get_by_id(parse_object_id(task_id, "task"), for_update)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def _authorize(self, task: Task, requester_id: UUID, message: str) -> ProjectAccess:
        """Require owner-or-member access on the task's project."""
        access = await self.project_service.load(task.project_id)
        if not access.can_access(requester_id):
            raise ForbiddenError(message)
        return access

    async def _with_details(self, tasks: list[Task]) -> list[TaskDetail]:
        """Load comments, projects and referenced users for a batch of tasks."""
        comments = await self.task_repo.get_comments_for(t.id for t in tasks)
        projects = await self.project_service.project_repo.get_by_ids(
            t.project_id for t in tasks
        )
        user_ids: set[UUID | None] = set()
        for task in tasks:
            user_ids.update((task.assigned_to, task.created_by))
            user_ids.update(c.author_id for c in comments[task.id])
        users = await self.user_repo.get_by_ids(i for i in user_ids if i is not None)
        return [
            TaskDetail(
                task=t, project=projects.get(t.project_id), comments=comments[t.id], users=users
            )
            for t in tasks
        ]

    async def _detail(self, task: Task) -> TaskDetail:
        return (await self._with_details([task]))[0]

    async def _resolve_assignee(self, assigned_to: str | None) -> UUID | None:
        if is_blank(assigned_to):
            return None
        assignee = parse_object_id(assigned_to, "assignee")
        if await self.user_repo.get_by_id(assignee) is None:
            raise ValidationError("Assigned user not found")
        return assignee

    async def list_for_project(
        self, project_id: str | UUID, requester_id: UUID
    ) -> list[TaskDetail]:
        """Tasks of a project the requester can access, newest first."""
        access = await self.project_service.load_accessible(project_id, requester_id)
        tasks = await self.task_repo.list_for_project(access.project.id)
        return await self._with_details(tasks)

    async def list_for_user(self, requester_id: UUID) -> list[TaskDetail]:
        """Tasks assigned to the requester, newest first. Assignment implies visibility."""
        tasks = await self.task_repo.list_assigned_to(requester_id)
        return await self._with_details(tasks)

    async def get(self, task_id: str | UUID, requester_id: UUID) -> TaskDetail:
        task = await self._load_task(task_id)
        await self._authorize(task, requester_id, "Not authorized to access this task")
        return await self._detail(task)

    async def create(self, requester_id: UUID, data: TaskCreate) -> TaskDetail:
        """Create a task in a project the requester can access."""
        access = await self.project_service.load_accessible(
            data.project_id,
            requester_id,
            message="Not authorized to create tasks in this project",
        )
        assigned_to = await self._resolve_assignee(data.assigned_to)

        task = Task(
            title=data.title,
            description=data.description,
            project_id=access.project.id,
            status=TaskStatus.PENDING.value,
            priority=data.priority or TaskPriority.MEDIUM.value,
            due_date=data.due_date,
            assigned_to=assigned_to,
            created_by=requester_id,
        )
        try:
            self.task_repo.add(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(task)
        logger.info("Task created", task_id=str(task.id), project_id=str(task.project_id))
        return await self._detail(task)

    async def update(
        self, task_id: str | UUID, requester_id: UUID, data: TaskUpdate
    ) -> TaskDetail:
        """Merge-patch a task. Owner or any member of the project may update."""
        try:
            task = await self._load_task(task_id, for_update=True)
            await self._authorize(task, requester_id, "Not authorized to update this task")

            patch = data.model_dump(exclude_unset=True)
            if "assigned_to" in patch:
                patch["assigned_to"] = await self._resolve_assignee(patch["assigned_to"])
            apply_merge_patch(task, patch)

            touch(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(task)
        return await self._detail(task)

    async def delete(self, task_id: str | UUID, requester_id: UUID) -> None:
        """Delete a task. Only the project owner may, whoever created the task."""
        try:
            task = await self._load_task(task_id, for_update=True)
            access = await self.project_service.load(task.project_id)
            if not access.can_manage(requester_id):
                raise ForbiddenError("Not authorized to delete this task")

            await self.task_repo.delete_with_comments(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task deleted", task_id=str(task.id), project_id=str(task.project_id))

    async def add_comment(self, task_id: str | UUID, requester_id: UUID, text: str) -> TaskDetail:
        """Append a comment authored by the requester."""
        try:
            task = await self._load_task(task_id, for_update=True)
            await self._authorize(task, requester_id, "Not authorized to comment on this task")

            self.task_repo.add_comment(task.id, text, requester_id)
            touch(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        return await self._detail(task)
