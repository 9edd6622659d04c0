import logging
import math
from typing import Optional
from app.config import Settings
from app.core.exceptions import (
    DuplicateNameError,
    InvalidIdError,
    InvalidPaginationError,
    InvalidTransitionError,
    NotFoundError,
)
from app.models.task import Task, TaskStatus
from app.schemas.task import (
    MessageResponse,
    PaginatedTasksResponse,
    PaginationMeta,
    TaskCreate,
    TaskFilters,
    TaskResponse,
    TaskUpdate,
)
from app.services.task_repository import TaskRepository

logger = logging.getLogger(__name__)

MAX_PAGE_LIMIT = 100


class TaskStore:
    """
    Task query and update rules on top of a TaskRepository.

    Every call is independent. Nothing here locks or caches; name uniqueness
    is left to the storage layer, which reports collisions as
    DuplicateNameError.
    """

    def __init__(self, repo: TaskRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    async def create(self, task_in: TaskCreate) -> Task:
        task = Task(
            name=task_in.name,
            due_date=task_in.due_date,
            status=task_in.status,
            priority=task_in.priority,
            is_active=task_in.is_active,
        )
        try:
            task = await self.repo.add(task)
        except DuplicateNameError:
            logger.warning("Rejected duplicate task name %r", task_in.name)
            raise
        logger.info("Created task id=%s name=%r", task.id, task.name)
        return task

    async def find_all(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[TaskFilters] = None,
    ) -> PaginatedTasksResponse:
        if page < 1:
            raise InvalidPaginationError("Page number must be greater than 0")
        if limit < 1 or limit > MAX_PAGE_LIMIT:
            raise InvalidPaginationError(f"Limit must be between 1 and {MAX_PAGE_LIMIT}")

        tasks, total = await self.repo.list(filters or TaskFilters(), (page - 1) * limit, limit)

        return PaginatedTasksResponse(
            data=[TaskResponse.model_validate(t) for t in tasks],
            meta=PaginationMeta(
                total=total,
                page=page,
                limit=limit,
                total_pages=math.ceil(total / limit),
            ),
        )

    async def find_one(self, task_id: int) -> Task:
        self._check_id(task_id)
        task = await self.repo.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    async def update(self, task_id: int, patch: TaskUpdate) -> Task:
        task = await self.find_one(task_id)
        changes = patch.changes()

        # done is terminal; done -> done is a no-op
        new_status = changes.get("status")
        if task.status == TaskStatus.DONE and new_status is not None and new_status != TaskStatus.DONE:
            logger.warning("Rejected status change %s -> %s for task id=%s", task.status.value, new_status.value, task_id)
            raise InvalidTransitionError()

        for field, value in changes.items():
            setattr(task, field, value)

        try:
            task = await self.repo.save(task)
        except DuplicateNameError:
            logger.warning("Rejected rename of task id=%s to duplicate name %r", task_id, changes.get("name"))
            raise
        logger.info("Updated task id=%s fields=%s", task_id, sorted(changes))
        return task

    async def soft_delete(self, task_id: int) -> Task:
        task = await self.find_one(task_id)
        task.is_active = False
        task = await self.repo.save(task)
        logger.info("Soft-deleted task id=%s", task_id)
        return task

    async def hard_delete(self, task_id: int) -> MessageResponse:
        self._check_id(task_id)
        if await self.repo.delete(task_id) == 0:
            raise NotFoundError(task_id)
        logger.info("Permanently deleted task id=%s", task_id)
        return MessageResponse(message="Task permanently deleted")

    @staticmethod
    def _check_id(task_id: int) -> None:
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise InvalidIdError()
