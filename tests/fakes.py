# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.core.exceptions import DuplicateNameError
from app.models.task import Task
from app.schemas.task import TaskFilters


def copy_task(task: Task) -> Task:
    return Task(
        id=task.id,
        name=task.name,
        due_date=task.due_date,
        status=task.status,
        priority=task.priority,
        created_at=task.created_at,
        is_active=task.is_active,
    )


def matches(task: Task, filters: TaskFilters) -> bool:
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.is_active is not None and task.is_active != filters.is_active:
        return False
    if filters.start_date and task.due_date < filters.start_date:
        return False
    if filters.end_date and task.due_date > filters.end_date:
        return False
    if filters.search and filters.search.lower() not in task.name.lower():
        return False
    return True


class FakeTaskRepository:
    """
    In-memory TaskRepository.

    Rows are stored as copies so a caller mutating a Task it got back
    doesn't change storage until save() succeeds, same as a rolled-back
    session. Each insert advances the clock by one second unless
    frozen_clock is set, which is how tests force createdAt ties.
    """

    def __init__(self, *, frozen_clock: bool = False) -> None:
        self.rows: dict[int, Task] = {}
        self._next_id = 1
        self._now = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
        self._frozen_clock = frozen_clock

    def _check_unique(self, task: Task) -> None:
        for row in self.rows.values():
            if row.name == task.name and row.id != task.id:
                raise DuplicateNameError()

    async def add(self, task: Task) -> Task:
        self._check_unique(task)
        task.id = self._next_id
        self._next_id += 1
        if not self._frozen_clock:
            self._now += timedelta(seconds=1)
        task.created_at = self._now
        self.rows[task.id] = copy_task(task)
        return task

    async def list(self, filters: TaskFilters, offset: int, limit: int) -> tuple[list[Task], int]:
        # newest first; a reverse sort is still stable, so ties stay in id order
        found = sorted((t for t in self.rows.values() if matches(t, filters)), key=lambda t: t.id)
        found.sort(key=lambda t: t.created_at, reverse=True)
        return [copy_task(t) for t in found[offset:offset + limit]], len(found)

    async def get(self, task_id: int) -> Task | None:
        row = self.rows.get(task_id)
        return copy_task(row) if row is not None else None

    async def save(self, task: Task) -> Task:
        self._check_unique(task)
        self.rows[task.id] = copy_task(task)
        return task

    async def delete(self, task_id: int) -> int:
        return 0 if self.rows.pop(task_id, None) is None else 1
