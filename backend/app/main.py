"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.config import get_settings
from app.core.logging import setup_logging
from app.core.telemetry import setup_telemetry

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application with routes, CORS and optional telemetry."""

    settings = get_settings()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    # Local front-end dev servers on any port
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "base_currency": settings.base_currency,
        }

    setup_telemetry(app, settings)
    return app


setup_logging(get_settings().log_level)
logger.info("Starting with settings %s", get_settings().dict_for_logging())
app = create_app()
