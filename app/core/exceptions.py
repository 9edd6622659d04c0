# app/core/exceptions.py
from fastapi import Request, status
from fastapi.responses import JSONResponse


class TaskError(Exception):
    """Base class for request-local task errors. Never retried."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidPaginationError(TaskError):
    message = "Invalid pagination parameters"


class InvalidIdError(TaskError):
    message = "Invalid task ID"


class InvalidTransitionError(TaskError):
    message = "Cannot change status of a completed task"


class DuplicateNameError(TaskError):
    message = "A task with this name already exists"


class NotFoundError(TaskError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    # Same body shape as HTTPException
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
