# app/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request
from sqlalchemy import exc as sa_exc, text
from app.config import Settings, get_settings
from app.core.exceptions import TaskError, task_error_handler
from app.core.logging_setup import setup_logging
from app.database import Base, build_engine, build_sessionmaker
from app.models.task import Task  # noqa: F401  registers the table on Base.metadata
from app.routers import task

logger = logging.getLogger(__name__)


async def create_tables(engine) -> None:
    # ignore duplicate-object errors from previous partial runs
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except (sa_exc.IntegrityError, sa_exc.ProgrammingError) as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = build_sessionmaker(engine)
        logger.info(
            "Database configured host=%s database=%s ssl=%s",
            settings.database_info["host"], settings.database_info["database"], settings.use_ssl,
        )
        # Alembic owns the schema in production
        if settings.create_tables:
            await create_tables(engine)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(title="Task Manager API", version="1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(TaskError, task_error_handler)
    app.include_router(task.router)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Task Manager API"}

    @app.get("/health")
    async def health(request: Request):
        body = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "databaseInfo": settings.database_info,
        }
        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (sa_exc.SQLAlchemyError, OSError) as e:
            logger.error("Health check failed: %s", e)
            return {"status": "error", "database": "disconnected", "error": str(e), **body}
        return {"status": "ok", "database": "connected", **body}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
