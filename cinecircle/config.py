"""
Runtime configuration helpers for the FastAPI application.

Loads DATABASE_URL and the remaining settings from the environment, falling
back to the .env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    # Required; comes from the environment or .env
    database_url: str = Field(..., alias="DATABASE_URL")

    # Optional fields
    app_name: str = Field(default="CineCircle API", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Access control
    elevated_roles: str = Field(default="superadmin", alias="ELEVATED_ROLES")

    # Activity feed
    feed_movie_activity_limit: int = Field(default=100, alias="FEED_MOVIE_ACTIVITY_LIMIT")
    feed_default_page_size: int = Field(default=20, alias="FEED_DEFAULT_PAGE_SIZE")
    feed_max_page_size: int = Field(default=100, alias="FEED_MAX_PAGE_SIZE")

    # External identity provider
    identity_jwt_secret: str | None = Field(default=None, alias="IDENTITY_JWT_SECRET")
    identity_jwt_algorithm: str = Field(default="HS256", alias="IDENTITY_JWT_ALGORITHM")
    identity_jwt_audience: str = Field(default="authenticated", alias="IDENTITY_JWT_AUDIENCE")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def elevated_role_set(self) -> frozenset[str]:
        return frozenset(role.strip().lower() for role in self.elevated_roles.split(",") if role.strip())

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
