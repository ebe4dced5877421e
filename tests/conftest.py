"""Root test fixtures shared across all test types.

Database fixtures live in tests/integration/conftest.py.
"""

import os

# Settings must see the test environment before any app import
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.pop("RESEND_API_KEY", None)

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator

import pytest

from src.vfxflow.core.audit_context import clear_audit_context
from src.vfxflow.core.config import get_settings
from src.vfxflow.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clean_context() -> Generator[None]:
    """Context vars bound by one test must not leak into the next."""
    clear_request_context()
    clear_audit_context()
    yield
    clear_request_context()
    clear_audit_context()
