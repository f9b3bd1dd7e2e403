"""Environment-driven application settings."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Runtime configuration read from the process environment."""

    control_plane_url: str = Field("http://localhost:8787", description="Control plane base URL")
    control_plane_timeout_seconds: float = Field(30.0, gt=0)
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = Field(15.0, gt=0)
    session_secret_key: str = "dev-secret-key-change-in-production"
    environment: str = "development"
    sentry_dsn: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Build settings once per process. Call get_settings.cache_clear() to reload."""
    return Settings(
        control_plane_url=os.getenv("CONTROL_PLANE_URL", "http://localhost:8787").rstrip("/"),
        control_plane_timeout_seconds=float(os.getenv("CONTROL_PLANE_TIMEOUT_SECONDS", "30")),
        github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
        github_timeout_seconds=float(os.getenv("GITHUB_TIMEOUT_SECONDS", "15")),
        session_secret_key=os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production"),
        environment=os.getenv("ENVIRONMENT", "development"),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
    )
