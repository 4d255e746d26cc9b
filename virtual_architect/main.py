"""
FastAPI application entrypoint for the Virtual Architect.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from virtual_architect.api.routes import router as api_router
from virtual_architect.core.config import get_settings
from virtual_architect.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Virtual Architect",
        version="0.1.0",
        description="Floorplan upload, AI scoring and conversational follow-up.",
    )

    origins = list(settings.cors_origins)
    if settings.frontend_base_url and settings.frontend_base_url not in origins:
        origins.append(settings.frontend_base_url)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")
    logger.info(
        "Virtual Architect API ready (env=%s, uploads=%s)",
        settings.environment,
        settings.storage.upload_dir,
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
