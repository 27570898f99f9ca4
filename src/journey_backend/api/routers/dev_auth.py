"""
journey_backend.api.routers.dev_auth

Dev-only token minting.

Responsibilities:
- Issue a signed token for an arbitrary identity so the upload endpoints can
  be exercised locally without the user service. Requires
  `dev_token_enabled`, and is never served in prod.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_404_NOT_FOUND

from journey_backend.api.deps import jwt_config, settings_dep
from journey_backend.auth.jwt import issue_token
from journey_backend.auth.models import Identity
from journey_backend.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    id: str = Field(min_length=1, max_length=128)
    username: str = Field(min_length=1, max_length=256)
    role: str = "user"
    permissions: list[str] = Field(default_factory=list)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_dep),
) -> DevTokenResponse:
    if not settings.dev_token_enabled or settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    identity = Identity(
        id=body.id,
        username=body.username,
        role=body.role,
        permissions=frozenset(body.permissions),
    )
    token = issue_token(
        cfg=jwt_config(settings),
        claims=identity.to_claims(),
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)
