"""
journey_backend.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Identity`) attached to requests.
- Convert between verified token claims and `Identity`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from journey_backend.auth.jwt import JwtValidationError


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Decoded claims of a verified bearer token. Lives for one request only.
    """

    id: str
    username: str
    role: str
    permissions: frozenset[str]
    name: str | None = None
    surname: str | None = None
    profile_image_url: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        user_id = str(claims.get("id") or "")
        username = str(claims.get("username") or "")
        if not user_id or not username:
            raise JwtValidationError("token is missing id/username claims")

        permissions_raw = claims.get("permissions", [])
        if not isinstance(permissions_raw, list):
            raise JwtValidationError("token permissions claim must be a list")

        return cls(
            id=user_id,
            username=username,
            role=str(claims.get("role") or "user"),
            permissions=frozenset(str(p) for p in permissions_raw),
            name=claims.get("name"),
            surname=claims.get("surname"),
            profile_image_url=claims.get("profile_image_url"),
        )

    def to_claims(self) -> dict[str, Any]:
        claims: dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "permissions": sorted(self.permissions),
        }
        for key in ("name", "surname", "profile_image_url"):
            value = getattr(self, key)
            if value is not None:
                claims[key] = value
        return claims


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; authorization rules belong to the journey/post
# services, not to the identity itself.
