from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Optional, List
from app.models.task import TaskStatus, TaskPriority

NAME_PATTERN = r"^[a-zA-Z0-9\s\-_]+$"


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=100, pattern=NAME_PATTERN)
    due_date: date
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.BLUE
    is_active: bool = True

    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {"name": "Complete Project Documentation", "dueDate": "2024-05-20", "status": "pending", "priority": "red", "isActive": True},
            {"name": "Read a book", "dueDate": "2024-06-01", "status": "in_progress", "priority": "blue", "isActive": False},
        ]
    })


class TaskUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=3, max_length=100, pattern=NAME_PATTERN)
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {"status": "in_progress"},
            {"name": "Updated Task Name", "priority": "yellow", "status": "in_progress"},
        ]
    })

    def changes(self) -> dict:
        """Fields the client actually sent; explicit nulls count as absent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TaskFilters(BaseModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    is_active: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None


class TaskResponse(CamelModel):
    id: int
    name: str
    due_date: date
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    is_active: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PaginationMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class PaginatedTasksResponse(CamelModel):
    data: List[TaskResponse]
    meta: PaginationMeta


class MessageResponse(BaseModel):
    message: str
