"""
travel_stay.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., the token signing secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TS_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "travel-stay"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 5000

    # Session tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "travel-stay"
    jwt_audience: str = "travel-stay-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_minutes: int = Field(default=60, ge=1)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./travel_stay.db"

    # Seeded with role=admin on startup; a fresh store otherwise has no one able to promote.
    bootstrap_admin_email: str | None = None

    # Analytics
    top_cities_limit: int = Field(default=3, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The signing secret is read once at process start; rotating it invalidates every
# outstanding session token.
