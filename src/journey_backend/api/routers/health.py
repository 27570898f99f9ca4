"""
journey_backend.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that checks the uploads directory.
"""

from __future__ import annotations

import os

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from journey_backend.api.deps import media_service
from journey_backend.media.service import MediaService

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(media: MediaService = Depends(media_service)) -> dict[str, str]:
    # Readiness: uploads must land somewhere writable.
    root = media.store.root
    if not root.is_dir() or not os.access(root, os.W_OK):
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="uploads dir not writable")
    return {"status": "ready"}
