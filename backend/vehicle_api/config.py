"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - sqlalchemy_url always names an async driver

Design Decisions:
    - DATABASE_URL wins; otherwise the URL is assembled from DATABASE_* parts
      (password URL-encoded)
    - Logging defaults follow ENVIRONMENT: development = DEBUG/text, production = INFO/json
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: Literal["development", "production"] = "production"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    api_prefix: str = "/api/v1"

    # Database
    database_url: str = ""
    database_host: str = "db"
    database_port: int = 5432
    database_name: str = "vehicles"
    database_user: str = "vehicles"
    database_password: str = "vehicles"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Observability
    log_level: str | None = None
    log_format: Literal["json", "text"] | None = None
    log_dir: str | None = None

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        password = quote(self.database_password, safe="")
        return (
            f"postgresql+asyncpg://{self.database_user}:{password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level
        return "DEBUG" if self.is_development else "INFO"

    @property
    def effective_log_format(self) -> str:
        if self.log_format:
            return self.log_format
        return "text" if self.is_development else "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
