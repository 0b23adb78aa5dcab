"""Stateless cookie sessions backed by the token codec."""

from datetime import UTC, datetime

from fastapi import Response
from fastapi.requests import HTTPConnection

from app.core.security import SessionClaims, TokenCodec


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None


class SessionManager:
    """
    Binds a TokenCodec to the session cookie.

    Nothing is stored server side: a session exists exactly as long as the
    client holds a cookie with a currently valid token.
    """

    def __init__(
        self,
        codec: TokenCodec,
        cookie_name: str = "session",
        secure: bool = False,
    ) -> None:
        self.codec = codec
        self.cookie_name = cookie_name
        self.secure = secure

    def start(self, response: Response, user_id: int, role: str) -> str:
        """Issue a token for the user and set it as the session cookie."""
        now = datetime.now(UTC)
        token = self.codec.issue(user_id, role, now=now)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.codec.ttl.total_seconds()),
            expires=now + self.codec.ttl,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
        return token

    def read_token(self, conn: HTTPConnection) -> str | None:
        token = conn.cookies.get(self.cookie_name)
        if token:
            return token
        return bearer_token(conn.headers.get("authorization"))

    def current(self, conn: HTTPConnection) -> SessionClaims | None:
        """Claims of the request's session; None when absent or invalid."""
        return self.codec.verify(self.read_token(conn))

    def end(self, response: Response) -> None:
        """Remove the session cookie. Safe to call without an active session."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
