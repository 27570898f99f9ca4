"""
journey_backend.media

Media ingestion package.

Responsibilities:
- Size/type policy constants and validation errors.
- The derivative pipeline and its local content store.
"""

# Package marker.
