import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, Enum, func, true
from app.database import Base


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    DONE = "done"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"


class TaskPriority(str, enum.Enum):
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)  # unique even when soft-deleted
    due_date = Column(Date, nullable=False)
    status = Column(
        Enum(TaskStatus, name="task_status_enum", values_callable=_enum_values),
        nullable=False,
        default=TaskStatus.PENDING,
        server_default=TaskStatus.PENDING.value,
    )
    priority = Column(
        Enum(TaskPriority, name="task_priority_enum", values_callable=_enum_values),
        nullable=False,
        default=TaskPriority.BLUE,
        server_default=TaskPriority.BLUE.value,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    def __repr__(self) -> str:
        return f"<Task id={self.id} name={self.name!r} status={self.status}>"
