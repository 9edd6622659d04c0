from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from app.config import Settings

Base = declarative_base()

UNIQUE_VIOLATION_SQLSTATE = "23505"


def build_engine(settings: Settings) -> AsyncEngine:
    db_url = settings.effective_database_url

    connect_args = {}
    if db_url.startswith("postgresql+asyncpg://"):
        connect_args = {
            "timeout": settings.DB_CONNECT_TIMEOUT,
            "command_timeout": settings.DB_COMMAND_TIMEOUT,
        }
        if settings.use_ssl:
            connect_args["ssl"] = "require"

    return create_async_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.sessionmaker() as session:
        yield session


def is_unique_violation(error: sa_exc.IntegrityError) -> bool:
    orig = getattr(error, "orig", error)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    msg = str(orig)
    return "duplicate key value violates unique constraint" in msg or "UNIQUE constraint failed" in msg
