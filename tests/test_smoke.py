"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts with test settings and probes respond.
- Ensure settings refuse to load without a JWT secret.
"""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from journey_backend.api.app import create_app
from journey_backend.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints(settings) -> None:
    app = create_app(settings=settings)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.headers["x-request-id"]

        r = await client.get("/readyz")
        assert r.status_code == 200
        assert r.json()["status"] == "ready"


def test_create_app_makes_uploads_dir(settings, uploads_dir) -> None:
    assert not uploads_dir.exists()

    create_app(settings=settings)

    assert uploads_dir.is_dir()


def test_settings_require_jwt_secret(monkeypatch) -> None:
    monkeypatch.delenv("JOURNEY_JWT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings()


def test_settings_read_secret_from_env(monkeypatch) -> None:
    monkeypatch.setenv("JOURNEY_JWT_SECRET", "from-env")

    settings = Settings()

    assert settings.jwt_secret == "from-env"
    assert "from-env" not in repr(settings)
