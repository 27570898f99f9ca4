"""
tests.conftest

Shared fixtures for pipeline, auth and API tests.
"""

from __future__ import annotations

import base64
import io
import random
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from journey_backend.auth.jwt import JwtConfig, issue_token
from journey_backend.auth.models import Identity
from journey_backend.media.store import LocalContentStore
from journey_backend.settings import Settings

TEST_SECRET = "test-secret"
BASE_URL = "http://testserver"


class RecordingLogger:
    """
    Minimal stand-in for a structlog logger; keeps (level, event, fields) tuples.
    """

    def __init__(self, records: list[tuple[str, str, dict[str, Any]]] | None = None, **bound: Any) -> None:
        self.records = records if records is not None else []
        self._bound = bound

    def bind(self, **kw: Any) -> RecordingLogger:
        return RecordingLogger(self.records, **{**self._bound, **kw})

    def _log(self, level: str, event: str, **kw: Any) -> None:
        self.records.append((level, event, {**self._bound, **kw}))

    def debug(self, event: str, **kw: Any) -> None:
        self._log("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._log("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._log("error", event, **kw)

    def events(self, level: str) -> list[str]:
        return [event for lvl, event, _ in self.records if lvl == level]


def image_b64(size: tuple[int, int] = (800, 600), fmt: str = "JPEG") -> str:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(40, 120, 200)).save(buf, format=fmt)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def corrupt_png_b64() -> str:
    """
    A noisy 400x300 PNG whose second IDAT chunk header is mangled.

    The header parses, so `Image.open` succeeds; decoding then fails part way
    with `SyntaxError: broken PNG file`.
    """

    rng = random.Random(7)
    buf = io.BytesIO()
    Image.frombytes("RGB", (400, 300), rng.randbytes(400 * 300 * 3)).save(buf, format="PNG")
    data = bytearray(buf.getvalue())

    idat_offsets = []
    pos = 8
    while pos < len(data):
        length = int.from_bytes(data[pos : pos + 4], "big")
        if data[pos + 4 : pos + 8] == b"IDAT":
            idat_offsets.append(pos)
        pos += 12 + length
    second = idat_offsets[1]
    data[second + 4 : second + 8] = b"\xc3\xb0,\x0c"
    return base64.b64encode(bytes(data)).decode("ascii")


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def store(uploads_dir: Path) -> LocalContentStore:
    return LocalContentStore(root=uploads_dir, base_url=BASE_URL)


@pytest.fixture
def jwt_cfg() -> JwtConfig:
    return JwtConfig(alg="HS256", secret=TEST_SECRET)


@pytest.fixture
def settings(uploads_dir: Path) -> Settings:
    return Settings(
        env="test",
        jwt_secret=TEST_SECRET,
        uploads_dir=uploads_dir,
        backend_external_url=BASE_URL,
        log_level="WARNING",
    )


@pytest.fixture
def traveller() -> Identity:
    return Identity(
        id="u-1",
        username="ana",
        role="user",
        permissions=frozenset({"create_post", "delete_post"}),
        name="Ana",
    )


@pytest.fixture
def make_token(jwt_cfg: JwtConfig):
    def _make(identity: Identity, *, ttl: timedelta = timedelta(hours=1), secret: str | None = None) -> str:
        cfg = jwt_cfg if secret is None else JwtConfig(alg=jwt_cfg.alg, secret=secret)
        return issue_token(cfg=cfg, claims=identity.to_claims(), ttl=ttl)

    return _make


@pytest.fixture
def make_image():
    return image_b64


@pytest.fixture
def corrupt_png() -> str:
    return corrupt_png_b64()
