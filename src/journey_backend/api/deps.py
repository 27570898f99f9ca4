"""
journey_backend.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the media service.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from journey_backend.auth.jwt import JwtConfig
from journey_backend.media.service import MediaService
from journey_backend.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # Apps built by `create_app` carry their own settings; fall back to env.
    return getattr(request.app.state, "settings", None) or get_settings()


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        secret=settings.jwt_secret,
        leeway_seconds=settings.jwt_leeway_seconds,
    )


def media_service(request: Request) -> MediaService:
    # Built once in `journey_backend.api.app.create_app`.
    return request.app.state.media  # type: ignore[attr-defined]
