# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import Base, build_engine, build_sessionmaker
from app.main import create_app
from app.services.task_repository import SqlTaskRepository
from app.services.task_store import TaskStore

from .fakes import FakeTaskRepository


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a throwaway SQLite file.

    _env_file=None keeps a developer's .env out of the test run.
    """
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}",
        ENVIRONMENT="development",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def fake_repo() -> FakeTaskRepository:
    return FakeTaskRepository()


@pytest.fixture()
def store(fake_repo: FakeTaskRepository, settings: Settings) -> TaskStore:
    """TaskStore over the in-memory repository."""
    return TaskStore(fake_repo, settings)


@pytest_asyncio.fixture()
async def db(settings: Settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with build_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture()
def sql_repo(db: AsyncSession) -> SqlTaskRepository:
    return SqlTaskRepository(db)


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
