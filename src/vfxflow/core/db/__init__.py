"""Database utilities - engine, session, migrations."""

from src.vfxflow.core.db.engine import dispose_engine, get_engine
from src.vfxflow.core.db.session import get_session, get_session_factory

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "get_session_factory",
]
