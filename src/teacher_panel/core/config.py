"""
Application Configuration

Settings are loaded from environment variables (or a local .env file)
using pydantic-settings. Import `settings` for the process-wide instance,
or call `get_settings()` where a fresh dependency is preferred.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    python_env: str = Field("development", alias="PYTHON_ENV")

    # Persistence
    database_url: str = Field(
        "sqlite+aiosqlite:///./teacher_panel.db",
        alias="DATABASE_URL",
    )
    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")

    # Tokens
    jwt_secret_key: str = Field("change-me", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Comma-separated list of administrator emails
    admin_emails: str = Field("", alias="ADMIN_EMAILS")

    # "allow": approving an already reviewed application overwrites it
    # "require_force": the request must carry force=true to do so
    reapproval_policy: Literal["allow", "require_force"] = Field(
        "allow", alias="REAPPROVAL_POLICY"
    )

    rate_limit_enabled: bool = Field(True, alias="RATE_LIMIT_ENABLED")

    cors_origins: str = Field("http://localhost:3000", alias="CORS_ORIGINS")

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def admin_email_list(self) -> list[str]:
        """Normalized administrator allow-list."""
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
