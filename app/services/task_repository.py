from typing import List, Optional, Protocol, Tuple
from sqlalchemy import select, func, delete
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import DuplicateNameError
from app.database import is_unique_violation
from app.models.task import Task
from app.schemas.task import TaskFilters


class TaskRepository(Protocol):
    """Storage port used by TaskStore."""

    async def add(self, task: Task) -> Task: ...

    async def list(self, filters: TaskFilters, offset: int, limit: int) -> Tuple[List[Task], int]: ...

    async def get(self, task_id: int) -> Optional[Task]: ...

    async def save(self, task: Task) -> Task: ...

    async def delete(self, task_id: int) -> int: ...


def filter_conditions(filters: TaskFilters) -> list:
    """Translate filters into WHERE clauses, ANDed by the caller."""
    conditions = []
    if filters.status is not None:
        conditions.append(Task.status == filters.status)
    if filters.priority is not None:
        conditions.append(Task.priority == filters.priority)
    if filters.is_active is not None:
        conditions.append(Task.is_active == filters.is_active)
    if filters.start_date and filters.end_date:
        conditions.append(Task.due_date.between(filters.start_date, filters.end_date))
    elif filters.start_date:
        conditions.append(Task.due_date >= filters.start_date)
    elif filters.end_date:
        conditions.append(Task.due_date <= filters.end_date)
    if filters.search:
        conditions.append(Task.name.icontains(filters.search, autoescape=True))
    return conditions


class SqlTaskRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, task: Task) -> Task:
        self.db.add(task)
        await self._commit()
        await self.db.refresh(task)
        return task

    async def list(self, filters: TaskFilters, offset: int, limit: int) -> Tuple[List[Task], int]:
        conditions = filter_conditions(filters)

        total = await self.db.execute(select(func.count(Task.id)).where(*conditions))

        result = await self.db.execute(
            select(Task)
            .where(*conditions)
            .order_by(Task.created_at.desc(), Task.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total.scalar_one()

    async def get(self, task_id: int) -> Optional[Task]:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def save(self, task: Task) -> Task:
        self.db.add(task)
        await self._commit()
        await self.db.refresh(task)
        return task

    async def delete(self, task_id: int) -> int:
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
        return result.rowcount

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except sa_exc.IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise DuplicateNameError() from e
            raise
