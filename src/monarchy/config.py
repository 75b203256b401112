"""Application configuration for the Monarchy combat service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from the environment (prefix ``MONARCHY_``) or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="MONARCHY_"
    )

    database_url: str = Field(default="sqlite:///monarchy.db", description="SQLAlchemy URL")
    database_echo: bool = Field(default=False, description="Log emitted SQL")
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_pool_recycle: int = Field(default=3600, description="Seconds before a pooled connection is recycled")
    database_pool_timeout: int = Field(default=30, ge=1)
    rules_version: str = Field(default="1.0", description="Combat ruleset version")
    log_level: str = Field(default="INFO", description="Root log level for the HTTP entrypoint")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
