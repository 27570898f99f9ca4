"""
journey_backend.media.service

Async facade over the media pipeline for the HTTP layer.

Responsibilities:
- Bind the content store, policies and a request-aware logger.
- Run blocking Pillow/filesystem work in Starlette's threadpool.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from starlette.concurrency import run_in_threadpool

from journey_backend.media import pipeline
from journey_backend.media.policy import (
    DEFAULT_IMAGE_POLICY,
    DEFAULT_VIDEO_POLICY,
    ImagePolicy,
    VideoPolicy,
)
from journey_backend.media.store import LocalContentStore


class MediaService:
    def __init__(
        self,
        *,
        store: LocalContentStore,
        log: structlog.stdlib.BoundLogger,
        image_policy: ImagePolicy = DEFAULT_IMAGE_POLICY,
        video_policy: VideoPolicy = DEFAULT_VIDEO_POLICY,
    ) -> None:
        self._store = store
        self._log = log
        self._image_policy = image_policy
        self._video_policy = video_policy

    @property
    def store(self) -> LocalContentStore:
        return self._store

    async def ingest_image(self, *, payload: str, mime_type: str, actor: str) -> dict[str, str]:
        log = self._log.bind(actor=actor, mime_type=mime_type)
        return await run_in_threadpool(
            pipeline.ingest, payload, mime_type, self._store, log, policy=self._image_policy
        )

    async def ingest_video(self, *, payload: str, mime_type: str, actor: str) -> str:
        log = self._log.bind(actor=actor, mime_type=mime_type)
        return await run_in_threadpool(
            pipeline.ingest_video, payload, mime_type, self._store, log, policy=self._video_policy
        )

    async def delete(self, *, urls: Mapping[str, str | None], actor: str) -> None:
        await run_in_threadpool(
            pipeline.delete_derivatives, urls, self._store, self._log.bind(actor=actor)
        )
