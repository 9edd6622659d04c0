from functools import lru_cache
from typing import Optional
from urllib.parse import urlsplit

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./tasks.db")
    SQLALCHEMY_DATABASE_URL: Optional[str] = None
    DATABASE_SSL: bool = Field(False)

    # "production" turns off create_all on startup and forces SSL
    ENVIRONMENT: str = Field("development")
    CREATE_TABLES: Optional[bool] = None

    DB_ECHO: bool = Field(False)
    DB_CONNECT_TIMEOUT: float = Field(10)
    DB_COMMAND_TIMEOUT: float = Field(10)

    DEFAULT_PAGE_LIMIT: int = Field(10, ge=1, le=100)

    LOG_LEVEL: str = Field("INFO")

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def use_ssl(self) -> bool:
        return self.DATABASE_SSL or self.is_production

    @property
    def create_tables(self) -> bool:
        if self.CREATE_TABLES is not None:
            return self.CREATE_TABLES
        return not self.is_production

    @property
    def effective_database_url(self) -> str:
        """
        Returns the URL handed to SQLAlchemy, with plain Postgres URLs
        switched to the asyncpg driver.
        """
        db_url = self.SQLALCHEMY_DATABASE_URL or self.DATABASE_URL
        if db_url.startswith("postgres://"):
            db_url = db_url.replace("postgres://", "postgresql://", 1)
        if db_url.startswith("postgresql://"):
            db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return db_url

    @property
    def database_info(self) -> dict:
        parts = urlsplit(self.effective_database_url)
        return {
            "host": parts.hostname or "unknown",
            "port": str(parts.port) if parts.port else "unknown",
            "database": parts.path.lstrip("/") or "unknown",
            "ssl": self.use_ssl,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
