"""
journey_backend.api.app

FastAPI app factory for the journey backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create the uploads directory and serve it under `/uploads`.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from journey_backend.api.deps import jwt_config
from journey_backend.api.routers.dev_auth import router as dev_auth_router
from journey_backend.api.routers.health import router as health_router
from journey_backend.api.routers.uploads import router as uploads_router
from journey_backend.auth.gate import AuthGateMiddleware
from journey_backend.media.service import MediaService
from journey_backend.media.store import PUBLIC_PREFIX, LocalContentStore
from journey_backend.observability.logging import configure_logging, get_logger
from journey_backend.observability.middleware import RequestContextMiddleware
from journey_backend.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, uploads_dir=str(settings.uploads_dir))
        yield
        log.info("shutdown")

    app = FastAPI(
        title="Journey Backend",
        lifespan=lifespan,
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    store = LocalContentStore(root=settings.uploads_dir, base_url=settings.backend_external_url)
    # StaticFiles checks the directory at mount time, so create it up front.
    store.ensure()
    app.state.settings = settings
    app.state.media = MediaService(store=store, log=get_logger("journey_backend.media"))

    # Last added runs first: CORS -> request context -> auth gate -> routes.
    app.add_middleware(AuthGateMiddleware, cfg=jwt_config(settings))
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(uploads_router)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=store.root), name="uploads")

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; media logic
# stays in `journey_backend.media`.
