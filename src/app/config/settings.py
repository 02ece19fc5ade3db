"""
Runtime configuration, read from environment variables and src/app/.env.

Every field has a default, so the service starts with no configuration at all
(against a local Postgres) and tests can build Settings(...) directly.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..validators.config_validators import to_lowercase, to_uppercase

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # --- Database ---
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "cats"
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False
    # Complete URL, e.g. "sqlite+aiosqlite:///./cats.db"; bypasses the POSTGRES_* parts
    DATABASE_URL_OVERRIDE: str | None = None
    SQLALCHEMY_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # --- Logging ---
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/cats")
    LOG_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """
        DATABASE_URL_OVERRIDE if set; otherwise a Postgres URL whose database is
        TEST_POSTGRES_DB when TESTING is on (and it is set), else POSTGRES_DB.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        use_test_db = self.TESTING and self.TEST_POSTGRES_DB
        database = self.TEST_POSTGRES_DB if use_test_db else self.POSTGRES_DB
        credentials = f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}"
        return f"postgresql+{self.POSTGRES_DRIVER}://{credentials}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{database}"

    # Case is normalised before the Literal check, so LOG_LEVEL=debug is accepted.
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        return to_lowercase(v)


@lru_cache()
def get_settings() -> Settings:
    """One Settings instance per process."""
    return Settings()
