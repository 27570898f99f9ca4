"""
journey_backend.media.policy

Static size/type policy for uploaded media.

Responsibilities:
- Name the derivative labels and their bounding boxes.
- Hold the byte ceilings and MIME subtype allow-lists as immutable constants.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

MiB = 1024 * 1024


class SizeLabel(str, enum.Enum):
    small = "small"
    medium = "medium"
    large = "large"
    original = "original"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


def _default_sizes() -> Mapping[SizeLabel, BoundingBox]:
    return MappingProxyType(
        {
            SizeLabel.small: BoundingBox(300, 225),
            SizeLabel.medium: BoundingBox(600, 450),
            SizeLabel.large: BoundingBox(1200, 900),
        }
    )


@dataclass(frozen=True, slots=True)
class ImagePolicy:
    max_bytes: int = 2 * MiB
    allowed_subtypes: frozenset[str] = frozenset(
        {"jpeg", "png", "gif", "webp", "svg", "bmp", "tiff"}
    )
    # Resized labels in processing order; `original` is always written as-is.
    sizes: Mapping[SizeLabel, BoundingBox] = field(default_factory=_default_sizes)


@dataclass(frozen=True, slots=True)
class VideoPolicy:
    max_bytes: int = 10 * MiB
    allowed_subtypes: frozenset[str] = frozenset({"mp4", "quicktime", "webm"})
    # Subtypes whose file extension differs from the MIME subtype.
    extensions: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"quicktime": "mov"})
    )

    def extension_for(self, subtype: str) -> str:
        return self.extensions.get(subtype, subtype)


DEFAULT_IMAGE_POLICY = ImagePolicy()
DEFAULT_VIDEO_POLICY = VideoPolicy()
