"""
journey_backend.auth.gate

Auth gate: optional bearer-token identity for every request.

Responsibilities:
- Parse the `Authorization` header and verify `Bearer` tokens.
- Attach the resulting `Identity` (or `None`) to `request.state.identity`.
- Never reject a request; invalid tokens degrade to anonymous with a warning.
"""

from __future__ import annotations

from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from journey_backend.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from journey_backend.auth.models import Identity
from journey_backend.observability.logging import get_logger

BEARER_PREFIX = "Bearer "


def resolve_identity(authorization: str | None, *, cfg: JwtConfig, log: Any) -> Identity | None:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX) :].strip()
    try:
        payload = decode_and_validate(cfg=cfg, token=token)
        return Identity.from_claims(payload)
    except JwtValidationError as e:
        log.warning("invalid_bearer_token", reason=str(e))
        return None


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    - Runs before every route
    - Downstream dependencies (`auth.deps`) decide whether anonymous is allowed
    """

    def __init__(self, app: ASGIApp, *, cfg: JwtConfig) -> None:
        super().__init__(app)
        self._cfg = cfg

    async def dispatch(self, request: Request, call_next) -> Response:
        identity = resolve_identity(
            request.headers.get("authorization"),
            cfg=self._cfg,
            log=get_logger(__name__),
        )
        request.state.identity = identity
        if identity is not None:
            structlog.contextvars.bind_contextvars(user_id=identity.id)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Registered after `RequestContextMiddleware` so token warnings carry the
# request id.
