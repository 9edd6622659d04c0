from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional
from app.database import get_db
from app.models.task import TaskStatus, TaskPriority
from app.schemas.task import (
    TaskCreate, TaskUpdate, TaskFilters, TaskResponse,
    PaginatedTasksResponse, MessageResponse
)
from app.services.task_repository import SqlTaskRepository
from app.services.task_store import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])

NOT_FOUND = {"description": "Task not found", "content": {"application/json": {"example": {"detail": "Task with ID 999 not found"}}}}
BAD_ID = {"description": "Invalid task ID", "content": {"application/json": {"example": {"detail": "Invalid task ID"}}}}


def get_task_store(request: Request, db: AsyncSession = Depends(get_db)) -> TaskStore:
    return TaskStore(SqlTaskRepository(db), request.app.state.settings)


def default_page_limit(request: Request) -> int:
    return request.app.state.settings.DEFAULT_PAGE_LIMIT


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    description=(
        "Creates a task. `name` and `dueDate` are required.\n\n"
        "- status: pending | done | in_progress | paused (default pending)\n"
        "- priority: red | yellow | blue (default blue)\n"
        "- isActive: true | false (default true)"
    ),
    responses={400: {
        "description": "Task name already exists",
        "content": {"application/json": {"example": {"detail": "A task with this name already exists"}}},
    }},
)
async def create_task(
    task_in: TaskCreate,
    store: TaskStore = Depends(get_task_store)
):
    return await store.create(task_in)


@router.get(
    "",
    response_model=PaginatedTasksResponse,
    summary="Get all tasks with pagination and filters",
    description=(
        "Lists tasks newest first. Filters combine with AND; soft-deleted tasks "
        "are included unless `isActive` is given.\n\n"
        "- page: default 1, min 1\n"
        "- limit: default 10, between 1 and 100\n"
        "- startDate / endDate: inclusive range on dueDate (YYYY-MM-DD)\n"
        "- search: case-insensitive match inside the task name"
    ),
    responses={400: {
        "description": "Invalid pagination",
        "content": {"application/json": {"example": {"detail": "Page number must be greater than 0"}}},
    }},
)
async def list_tasks(
    page: int = Query(1, description="Page number (min 1)", examples=[1]),
    limit: Optional[int] = Query(None, description="Items per page (1-100, default 10)", examples=[10]),
    status: Optional[TaskStatus] = Query(None, description="Filter by task status"),
    priority: Optional[TaskPriority] = Query(None, description="Filter by task priority"),
    is_active: Optional[bool] = Query(None, alias="isActive", description="Filter by active flag"),
    start_date: Optional[date] = Query(None, alias="startDate", description="Earliest due date", examples=["2024-05-01"]),
    end_date: Optional[date] = Query(None, alias="endDate", description="Latest due date", examples=["2024-05-31"]),
    search: Optional[str] = Query(None, description="Search in task names", examples=["project"]),
    fallback_limit: int = Depends(default_page_limit),
    store: TaskStore = Depends(get_task_store)
):
    # page/limit bounds are checked by the store, not by FastAPI
    filters = TaskFilters(
        status=status,
        priority=priority,
        is_active=is_active,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    return await store.find_all(page, limit if limit is not None else fallback_limit, filters)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by id",
    description="Soft-deleted tasks are returned too.",
    responses={400: BAD_ID, 404: NOT_FOUND},
)
async def get_task(
    task_id: int,
    store: TaskStore = Depends(get_task_store)
):
    return await store.find_one(task_id)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
    description="Updates only the fields sent. A task whose status is `done` cannot move to another status.",
    responses={
        400: {
            "description": "Invalid input, duplicate name or completed task",
            "content": {"application/json": {"example": {"detail": "Cannot change status of a completed task"}}},
        },
        404: NOT_FOUND,
    },
)
async def update_task(
    task_id: int,
    patch: TaskUpdate,
    store: TaskStore = Depends(get_task_store)
):
    return await store.update(task_id, patch)


@router.delete(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Soft delete a task",
    responses={400: BAD_ID, 404: NOT_FOUND},
)
async def soft_delete_task(
    task_id: int,
    store: TaskStore = Depends(get_task_store)
):
    """
    Marks the task inactive. The row stays in the table and is still
    returned by GET /tasks/{task_id}.
    """
    return await store.soft_delete(task_id)


@router.delete(
    "/{task_id}/permanent",
    response_model=MessageResponse,
    summary="Permanently delete a task",
    responses={400: BAD_ID, 404: NOT_FOUND},
)
async def hard_delete_task(
    task_id: int,
    store: TaskStore = Depends(get_task_store)
):
    """
    Removes the task for good. Cannot be undone.
    """
    return await store.hard_delete(task_id)
