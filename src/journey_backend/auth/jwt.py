"""
journey_backend.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Decode and verify bearer tokens against the shared secret.
- Issue short-lived JWTs for local/dev scenarios and tests.

Note:
- Tokens are HS256-signed by the user service with the same secret; there is
  no issuer/audience contract, so only signature and `exp` are enforced.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str
    leeway_seconds: int = 0


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    claims: dict[str, Any],
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # Signature is always checked; exp/iat/nbf are verified when present.
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            leeway=cfg.leeway_seconds,
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by:
# - `api/routers/dev_auth.py` (dev convenience)
# - tests that need a validly signed identity
