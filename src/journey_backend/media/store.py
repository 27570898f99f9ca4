"""
journey_backend.media.store

Flat local content store for uploaded media.

Responsibilities:
- Own the uploads directory (idempotent creation, writes, removals).
- Map object names to public URLs and back.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

PUBLIC_PREFIX = "/uploads"


class LocalContentStore:
    def __init__(self, *, root: Path, base_url: str) -> None:
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def ensure(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def object_name(identifier: str, label: str, extension: str) -> str:
        return f"{identifier}-{label}.{extension}"

    def path_for(self, name: str) -> Path:
        # Object names are flat; anything that could escape the root is refused.
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"invalid object name: {name!r}")
        return self._root / name

    def write(self, name: str, data: bytes) -> Path:
        path = self.path_for(name)
        path.write_bytes(data)
        return path

    def remove(self, name: str) -> None:
        self.path_for(name).unlink()

    def public_url(self, name: str) -> str:
        return f"{self._base_url}{PUBLIC_PREFIX}/{name}"

    @staticmethod
    def name_from_url(url: str) -> str:
        return PurePosixPath(unquote(urlsplit(url).path)).name


# --- Module Notes -----------------------------------------------------------
# The same directory is mounted as static files under `/uploads` by the app
# factory, which is what makes `public_url` reachable.
