"""
journey_backend.media.errors

Validation errors raised by the ingestion pipeline before any I/O happens.

`MediaValidationError` is only a common base for `except` clauses; the
pipeline raises one of the three subclasses.
"""

from __future__ import annotations


class MediaValidationError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SizeLimitExceeded(MediaValidationError):
    pass


class InvalidType(MediaValidationError):
    pass


class UnsupportedFormat(MediaValidationError):
    pass
