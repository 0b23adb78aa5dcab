"""Typed authentication / authorization failures."""

from enum import Enum


class AuthErrorKind(str, Enum):
    """Discriminant that the HTTP layer maps to a status code."""

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    INVALID_CREDENTIALS = "invalid_credentials"


AUTH_ERROR_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.UNAUTHENTICATED: 401,
    AuthErrorKind.FORBIDDEN: 403,
    AuthErrorKind.INVALID_CREDENTIALS: 401,
}

_DEFAULT_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.UNAUTHENTICATED: "Not authenticated",
    AuthErrorKind.FORBIDDEN: "Insufficient permissions",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid email or password",
}


class AuthError(Exception):
    """Raised by the access guard and login flow; carries an explicit kind."""

    def __init__(self, kind: AuthErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return AUTH_ERROR_STATUS[self.kind]

    @classmethod
    def unauthenticated(cls, message: str | None = None) -> "AuthError":
        return cls(AuthErrorKind.UNAUTHENTICATED, message)

    @classmethod
    def forbidden(cls, message: str | None = None) -> "AuthError":
        return cls(AuthErrorKind.FORBIDDEN, message)

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        return cls(AuthErrorKind.INVALID_CREDENTIALS)
