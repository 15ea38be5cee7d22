"""
travel_stay.api.__main__

Entrypoint for running the FastAPI application via `python -m travel_stay.api`.
"""

from __future__ import annotations

import uvicorn

from travel_stay.api.app import create_app
from travel_stay.settings import get_settings


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
