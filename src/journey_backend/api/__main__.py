"""
journey_backend.api.__main__

Entrypoint for running the FastAPI application via `python -m journey_backend.api`.

Responsibilities:
- Load settings (fails fast when the JWT secret is not configured).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from journey_backend.api.app import create_app
from journey_backend.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
