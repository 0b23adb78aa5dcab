"""Core app configuration, database and auth primitives."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import AuthError, AuthErrorKind

__all__ = ["AuthError", "AuthErrorKind", "get_settings", "settings", "get_db"]
