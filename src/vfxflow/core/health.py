"""Health and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.vfxflow.core.config import get_settings
from src.vfxflow.core.db import get_session
from src.vfxflow.core.shutdown import request_tracker

HEALTH_CACHE_TTL = 10  # seconds

_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0


def reset_health_cache() -> None:
    """Reset health cache (for testing)."""
    global _health_cache, _health_cache_time
    _health_cache = None
    _health_cache_time = 0


async def _check_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return f"unhealthy: {e!s}"
    return "healthy"


def setup_health_endpoint(app: FastAPI) -> None:
    """Register ``GET /health``. The database is the only hard dependency."""

    @app.get("/health")
    async def health() -> JSONResponse:
        global _health_cache, _health_cache_time

        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                },
                status_code=503,
            )

        now = time.time()
        if _health_cache is not None and (now - _health_cache_time) < HEALTH_CACHE_TTL:
            body = {**_health_cache, "cached": True}
            return JSONResponse(
                content=body, status_code=200 if body["status"] == "healthy" else 503
            )

        database = await _check_database()
        body = {
            "status": "healthy" if database == "healthy" else "unhealthy",
            "database": database,
            "cached": False,
            "timestamp": now,
        }
        _health_cache = body
        _health_cache_time = now
        return JSONResponse(content=body, status_code=200 if body["status"] == "healthy" else 503)


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics, behind ``X-Metrics-Key`` when one is configured."""
    settings = get_settings()
    instrumentator = Instrumentator().instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics")
        return

    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        expected = settings.metrics_api_key
        if api_key is None or expected is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
