"""
journey_backend.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Expose the identity attached by the auth gate.
- Reject anonymous callers on endpoints that need an identity.
- Offer a reusable permission-check dependency factory.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from journey_backend.auth.models import Identity


def get_identity(request: Request) -> Identity | None:
    # Set by `AuthGateMiddleware`; absent when the gate is not installed.
    return getattr(request.state, "identity", None)


def require_identity(identity: Identity | None = Depends(get_identity)) -> Identity:
    if identity is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Authentication required.")
    return identity


def require_permissions(*required: str):
    def _dep(identity: Identity = Depends(require_identity)) -> Identity:
        if identity.is_admin:
            return identity
        if not all(identity.has_permission(p) for p in required):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return identity

    return _dep


# --- Module Notes -----------------------------------------------------------
# Journey-level rules (owner/collaborator checks) build on `require_identity`
# in the services that own those records.
