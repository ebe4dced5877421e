"""Structured logging for the workflow engine.

Every line carries the service name and environment. Request handlers add
the correlation id and the acting user (id and roles) through contextvars, so
service code only logs domain fields such as ``project_id`` or ``grant_id``.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

SERVICE_NAME = "vfxflow"

_NOISY_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def _service_stamper(app_env: str) -> structlog.typing.Processor:
    def stamp(
        _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("env", app_env)
        return event_dict

    return stamp


def build_processors(debug: bool, app_env: str) -> list[structlog.typing.Processor]:
    """Processor chain: console output in debug, one JSON object per line otherwise."""
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        _service_stamper(app_env),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )
    return processors


def setup_logging(debug: bool = False, app_env: str = "development") -> None:
    """Route structlog through stdlib logging on stdout."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=build_processors(debug, app_env),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name, level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation id to every line logged while handling this request."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(user_id: UUID, roles: list[str], email: str | None = None) -> None:
    """Attach the authenticated caller.

    Roles are logged sorted so the same caller always produces the same line.
    The email is bound only when ``log_user_emails`` is enabled.
    """
    from src.vfxflow.core.config import get_settings

    bind_contextvars(user_id=str(user_id), user_roles=sorted(roles))
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
