"""Access guard: resolve the acting user and enforce role requirements."""

import logging
from collections.abc import Iterable

from fastapi.requests import HTTPConnection
from sqlalchemy.orm import Session

from app.core.errors import AuthError
from app.core.session import SessionManager
from app.models import Role, User
from app.services.users import find_user_by_id

logger = logging.getLogger(__name__)

RoleSpec = Role | str | Iterable[Role | str]


def _role_values(required: RoleSpec) -> frozenset[str]:
    if isinstance(required, (Role, str)):
        required = [required]
    return frozenset(r.value if isinstance(r, Role) else r for r in required)


def has_permission(user_role: str, required: RoleSpec) -> bool:
    """True if user_role is one of the required roles."""
    return user_role in _role_values(required)


class AccessGuard:
    """
    Per-request authentication and authorization.

    The session only proves that the user logged in once; the user row is
    re-read on every call so deletions and role changes apply immediately.
    """

    def __init__(self, sessions: SessionManager) -> None:
        self.sessions = sessions

    def require_auth(self, conn: HTTPConnection, db: Session) -> User:
        """Return the current user as stored; UNAUTHENTICATED if none."""
        claims = self.sessions.current(conn)
        if claims is None:
            raise AuthError.unauthenticated()
        user = find_user_by_id(db, claims.user_id)
        if user is None:
            logger.info("Session references missing user_id=%s", claims.user_id)
            raise AuthError.unauthenticated("Session is no longer valid")
        return user

    def require_role(self, conn: HTTPConnection, db: Session, required: RoleSpec) -> User:
        """Authenticate first, then check the stored role; FORBIDDEN if insufficient."""
        user = self.require_auth(conn, db)
        if not has_permission(user.role, required):
            logger.info(
                "Forbidden: user_id=%s role=%s required=%s",
                user.id,
                user.role,
                sorted(_role_values(required)),
            )
            raise AuthError.forbidden()
        return user

    def require_admin(self, conn: HTTPConnection, db: Session) -> User:
        return self.require_role(conn, db, Role.ADMIN)
