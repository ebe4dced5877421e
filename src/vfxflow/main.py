from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.vfxflow.api.middlewares import setup_middlewares
from src.vfxflow.api.v1.router import api_router
from src.vfxflow.core.config import get_settings
from src.vfxflow.core.db import dispose_engine
from src.vfxflow.core.exceptions import setup_exception_handlers
from src.vfxflow.core.health import setup_health_endpoint, setup_metrics
from src.vfxflow.core.logging import get_logger, setup_logging
from src.vfxflow.core.shutdown import request_tracker

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug, settings.app_env)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    await request_tracker.start_shutdown()
    await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period)
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "statuses", "description": "Project status catalog"},
    {"name": "projects", "description": "Project lifecycle and status history"},
    {"name": "sharing", "description": "Sharing studio tasks with artists"},
    {"name": "artist views", "description": "Work visible to the calling artist"},
    {"name": "audit", "description": "Audit trail (admin only)"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project lifecycle and task sharing workflow API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
