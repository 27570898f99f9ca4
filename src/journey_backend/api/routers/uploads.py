"""
journey_backend.api.routers.uploads

Upload and media cleanup endpoints.

Responsibilities:
- Accept base64 image/video uploads from authenticated users.
- Translate pipeline validation errors into HTTP responses.
- Best-effort removal of derivative sets whose owning post is gone.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import (
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_415_UNSUPPORTED_MEDIA_TYPE,
)

from journey_backend.api.deps import media_service
from journey_backend.auth.deps import require_identity, require_permissions
from journey_backend.auth.models import Identity
from journey_backend.media.errors import (
    InvalidType,
    MediaValidationError,
    SizeLimitExceeded,
    UnsupportedFormat,
)
from journey_backend.media.service import MediaService

router = APIRouter(tags=["uploads"])


class _CamelModel(BaseModel):
    # The web client speaks camelCase; Python code uses snake_case.
    model_config = ConfigDict(populate_by_name=True)


class ImageUploadRequest(_CamelModel):
    image_base64: str = Field(alias="imageBase64", min_length=1)
    image_type: str = Field(alias="imageType", min_length=1)


class ImageUploadResponse(_CamelModel):
    image_urls: dict[str, str] = Field(alias="imageUrls")


class MediaUploadRequest(_CamelModel):
    file_base64: str = Field(alias="fileBase64", min_length=1)
    file_type: str = Field(alias="fileType", min_length=1)


class MediaInfo(BaseModel):
    type: Literal["image", "video"]
    urls: dict[str, str] | None = None
    url: str | None = None


class MediaUploadResponse(_CamelModel):
    media_info: MediaInfo = Field(alias="mediaInfo")


class DeleteMediaRequest(_CamelModel):
    image_urls: dict[str, str | None] = Field(alias="imageUrls")


_STATUS_BY_ERROR: dict[type[MediaValidationError], int] = {
    SizeLimitExceeded: HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    InvalidType: HTTP_400_BAD_REQUEST,
    UnsupportedFormat: HTTP_415_UNSUPPORTED_MEDIA_TYPE,
}


def _http_error(e: MediaValidationError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_ERROR[type(e)], detail=e.message)


@router.post("/upload-image", response_model=ImageUploadResponse, response_model_exclude_none=True)
async def upload_image(
    body: ImageUploadRequest,
    identity: Identity = Depends(require_identity),
    media: MediaService = Depends(media_service),
) -> ImageUploadResponse:
    try:
        urls = await media.ingest_image(
            payload=body.image_base64, mime_type=body.image_type, actor=identity.id
        )
    except MediaValidationError as e:
        raise _http_error(e) from e
    return ImageUploadResponse(image_urls=urls)


@router.post("/upload-media", response_model=MediaUploadResponse, response_model_exclude_none=True)
async def upload_media(
    body: MediaUploadRequest,
    identity: Identity = Depends(require_identity),
    media: MediaService = Depends(media_service),
) -> MediaUploadResponse:
    try:
        if body.file_type.startswith("image/"):
            urls = await media.ingest_image(
                payload=body.file_base64, mime_type=body.file_type, actor=identity.id
            )
            info = MediaInfo(type="image", urls=urls)
        elif body.file_type.startswith("video/"):
            url = await media.ingest_video(
                payload=body.file_base64, mime_type=body.file_type, actor=identity.id
            )
            info = MediaInfo(type="video", url=url)
        else:
            raise HTTPException(status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail="Unsupported file type.")
    except MediaValidationError as e:
        raise _http_error(e) from e
    return MediaUploadResponse(media_info=info)


@router.post("/delete-media", status_code=HTTP_204_NO_CONTENT)
async def delete_media(
    body: DeleteMediaRequest,
    identity: Identity = Depends(require_permissions("delete_post")),
    media: MediaService = Depends(media_service),
) -> Response:
    await media.delete(urls=body.image_urls, actor=identity.id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# `/delete-media` lets clients discard an upload that never got attached to a
# post; the mapping it accepts is the one `/upload-image` returned.
