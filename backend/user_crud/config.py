# backend/user_crud/config.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # environment: "dev" for running the app locally, "test" for pytest, "prod" otherwise
    ENV: str = "dev"

    DATABASE_URL: str | None = None
    TEST_DATABASE_URL: str | None = None

    # --- Connection pool ---
    DB_POOL_SIZE: int = Field(5, ge=1, description="Maximum number of pooled connections.")
    DB_POOL_TIMEOUT: float = Field(30.0, gt=0, description="Seconds to wait for a free connection.")
    DB_REQUIRE_SSL: bool = False
    # Fail startup when the database cannot be reached.
    DB_CONNECT_ON_STARTUP: bool = True
    # Migrations own the schema; SQLite databases are always created eagerly.
    AUTO_CREATE_TABLES: bool = False

    # --- Server ---
    HOST: str = "127.0.0.1"
    PORT: int = Field(3000, ge=1, le=65535)
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
