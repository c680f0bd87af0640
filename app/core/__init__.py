"""Core app configuration, database and errors."""

from app.core.config import get_settings, settings
from app.core.database import UnitOfWork, get_db, get_session_factory, read_session

__all__ = [
    "UnitOfWork",
    "get_db",
    "get_session_factory",
    "get_settings",
    "read_session",
    "settings",
]
