"""
journey_backend.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven service configuration.

    `jwt_secret` has no default: a missing `JOURNEY_JWT_SECRET` fails validation
    at startup instead of silently verifying tokens against a known value.
    """

    model_config = SettingsConfigDict(env_prefix="JOURNEY_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "journey-backend"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(min_length=1, repr=False)
    jwt_leeway_seconds: int = Field(default=0, ge=0)
    # Serves `/v1/dev/token`; off unless explicitly enabled outside prod.
    dev_token_enabled: bool = False

    # Media
    backend_external_url: str = "http://localhost:3001"
    uploads_dir: Path = Path("uploads")

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Image size policy is deliberately not part of Settings; see `media.policy`.
