"""
journey_backend.media.pipeline

Image ingestion and multi-resolution derivative pipeline.

Responsibilities:
- Validate base64 uploads (size, MIME prefix, subtype allow-list) before I/O.
- Write `small`/`medium`/`large` derivatives plus the untouched original.
- Remove a previously produced derivative set on a best-effort basis.

Failure policy:
- Validation errors are raised to the caller (`media.errors`).
- A derivative that cannot be resized is logged and left out of the result;
  the remaining labels are still written.
- Deletion never raises.
"""

from __future__ import annotations

import base64
import io
import re
import uuid
from collections.abc import Mapping

import structlog
from PIL import Image

from journey_backend.media.errors import (
    InvalidType,
    SizeLimitExceeded,
    UnsupportedFormat,
)
from journey_backend.media.policy import (
    DEFAULT_IMAGE_POLICY,
    DEFAULT_VIDEO_POLICY,
    BoundingBox,
    ImagePolicy,
    SizeLabel,
    VideoPolicy,
)
from journey_backend.media.store import LocalContentStore

_DATA_URL_MARKER = ";base64,"
_URLSAFE = str.maketrans("-_", "+/")
_NON_B64 = re.compile(r"[^A-Za-z0-9+/]")


def decode_payload(payload: str) -> bytes:
    """
    Decode base64 the forgiving way browsers produce it; never raises.

    Accepts `data:<mime>;base64,` URLs, url-safe characters, embedded whitespace
    and missing padding. Characters outside the alphabet are skipped.
    """

    if payload.startswith("data:") and _DATA_URL_MARKER in payload:
        payload = payload.split(_DATA_URL_MARKER, 1)[1]
    cleaned = _NON_B64.sub("", payload.translate(_URLSAFE))
    # A lone trailing sextet cannot encode a byte.
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned, validate=True)


def _validate(
    data: bytes,
    mime_type: str,
    *,
    prefix: str,
    max_bytes: int,
    allowed_subtypes: frozenset[str],
    log: structlog.stdlib.BoundLogger,
) -> str:
    kind = prefix.rstrip("/")
    if len(data) > max_bytes:
        log.warning("upload_size_exceeded", size_bytes=len(data), max_bytes=max_bytes)
        raise SizeLimitExceeded(f"{kind.capitalize()} size exceeds {max_bytes // (1024 * 1024)}MB limit.")

    if not mime_type.startswith(prefix):
        log.warning("upload_invalid_type", mime_type=mime_type, expected_prefix=prefix)
        raise InvalidType(f"Invalid {kind} type.")

    subtype = mime_type[len(prefix) :].split(";", 1)[0].strip().lower()
    if subtype not in allowed_subtypes:
        log.warning("upload_unsupported_format", mime_type=mime_type, subtype=subtype)
        raise UnsupportedFormat(f"Unsupported {kind} file format.")
    return subtype


def resize_to_fit(data: bytes, box: BoundingBox) -> bytes:
    """
    Shrink `data` to fit inside `box`, keeping aspect ratio and the source format.

    Images already inside the box keep their dimensions (no upscaling).
    """

    with Image.open(io.BytesIO(data)) as im:
        fmt = im.format
        im.thumbnail(box.as_tuple())
        out = io.BytesIO()
        im.save(out, format=fmt)
    return out.getvalue()


def ingest(
    payload: str,
    mime_type: str,
    store: LocalContentStore,
    log: structlog.stdlib.BoundLogger,
    *,
    policy: ImagePolicy = DEFAULT_IMAGE_POLICY,
) -> dict[str, str]:
    data = decode_payload(payload)
    extension = _validate(
        data,
        mime_type,
        prefix="image/",
        max_bytes=policy.max_bytes,
        allowed_subtypes=policy.allowed_subtypes,
        log=log,
    )

    store.ensure()
    identifier = str(uuid.uuid4())
    urls: dict[str, str] = {}

    for label in (*policy.sizes.keys(), SizeLabel.original):
        name = store.object_name(identifier, label.value, extension)
        if label is SizeLabel.original:
            buffer = data
        else:
            box = policy.sizes[label]
            try:
                buffer = resize_to_fit(data, box)
            except Exception as e:
                # Pillow reports damaged files as OSError, SyntaxError, ValueError and more.
                log.warning(
                    "derivative_resize_failed",
                    label=label.value,
                    object_name=name,
                    error=repr(e),
                )
                continue

        store.write(name, buffer)
        log.info("derivative_written", label=label.value, object_name=name, size_bytes=len(buffer))
        urls[label.value] = store.public_url(name)

    return urls


def ingest_video(
    payload: str,
    mime_type: str,
    store: LocalContentStore,
    log: structlog.stdlib.BoundLogger,
    *,
    policy: VideoPolicy = DEFAULT_VIDEO_POLICY,
) -> str:
    data = decode_payload(payload)
    subtype = _validate(
        data,
        mime_type,
        prefix="video/",
        max_bytes=policy.max_bytes,
        allowed_subtypes=policy.allowed_subtypes,
        log=log,
    )

    store.ensure()
    name = store.object_name(str(uuid.uuid4()), SizeLabel.original.value, policy.extension_for(subtype))
    store.write(name, data)
    log.info("video_written", object_name=name, size_bytes=len(data))
    return store.public_url(name)


def delete_derivatives(
    urls: Mapping[str, str | None],
    store: LocalContentStore,
    log: structlog.stdlib.BoundLogger,
) -> None:
    for label, url in urls.items():
        if not url:
            continue
        try:
            name = store.name_from_url(url)
            store.remove(name)
            log.info("derivative_deleted", label=label, object_name=name)
        except (OSError, ValueError) as e:
            # Orphaned files are tolerated; the owning record is already gone.
            log.warning("derivative_delete_failed", label=label, url=url, error=repr(e))


# --- Module Notes -----------------------------------------------------------
# All functions here are synchronous; `media.service.MediaService` moves them
# off the event loop for HTTP callers.
