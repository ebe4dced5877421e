"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.vfxflow.core.config import Settings

from .audit_context import audit_context_middleware
from .logging_context import logging_context_middleware
from .request_tracking import request_tracking_middleware

__all__ = [
    "audit_context_middleware",
    "logging_context_middleware",
    "request_tracking_middleware",
    "setup_middlewares",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middleware order matters - the last one added runs first on a request,
    so the correlation id is assigned before any context middleware reads it.
    """
    # Request tracking - for graceful shutdown
    @app.middleware("http")
    async def _request_tracking(request, call_next):  # type: ignore[no-untyped-def]
        return await request_tracking_middleware(request, call_next)

    @app.middleware("http")
    async def _audit_context(request, call_next):  # type: ignore[no-untyped-def]
        return await audit_context_middleware(request, call_next)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID
    app.add_middleware(CorrelationIdMiddleware)
