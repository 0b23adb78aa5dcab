"""Auth dependencies for route handlers (get_current_user, require_role, require_admin)."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.guard import AccessGuard
from app.core.security import build_token_codec
from app.core.session import SessionManager
from app.models import Role, User


@lru_cache
def get_session_manager() -> SessionManager:
    """Process-wide session manager built once from settings."""
    settings = get_settings()
    return SessionManager(
        build_token_codec(settings),
        cookie_name=settings.SESSION_COOKIE_NAME,
        secure=settings.secure_cookies,
    )


@lru_cache
def get_access_guard() -> AccessGuard:
    return AccessGuard(get_session_manager())


def get_current_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> User:
    """Dependency: require a valid session whose user still exists. 401 otherwise."""
    return guard.require_auth(request, db)


def require_role(*roles: Role | str) -> Callable[..., User]:
    """Dependency factory: require one of roles (checked against the stored role). 403 otherwise."""

    def dependency(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        guard: Annotated[AccessGuard, Depends(get_access_guard)],
    ) -> User:
        return guard.require_role(request, db, roles)

    return dependency


def require_admin(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> User:
    """Dependency: require an authenticated user whose stored role is 'admin'."""
    return guard.require_admin(request, db)


def start_session(response: Response, user: User) -> str:
    """Set the session cookie for user on response; returns the token."""
    return get_session_manager().start(response, user.id, user.role)


def end_session(response: Response) -> None:
    get_session_manager().end(response)
