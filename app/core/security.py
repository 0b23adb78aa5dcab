"""Password hashing and session token signing/verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

# Min/max lengths for signup and login input validation.
NAME_MIN_LEN = 2
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Claims every session token must carry.
REQUIRED_CLAIMS = ["userId", "role", "iat", "exp"]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token."""

    user_id: int
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """
    Signs and verifies session tokens (HMAC JWT carrying userId, role, iat, exp).

    verify() never raises: any invalid, tampered or expired token yields None.
    Expiry is exact; no clock-skew leeway is applied.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl

    def issue(
        self,
        user_id: int,
        role: str,
        now: datetime | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed token for user_id/role, valid for ttl (default self.ttl) from now."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "userId": user_id,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + (self.ttl if ttl is None else ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> SessionClaims | None:
        """Return the token's claims, or None if it is not currently valid."""
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            logger.debug("Session token rejected: %s", e)
            return None

        user_id = payload.get("userId")
        role = payload.get("role")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
            logger.debug("Session token rejected: malformed claims")
            return None
        return SessionClaims(
            user_id=user_id,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


def build_token_codec(app_settings=None) -> TokenCodec:
    """Construct the process-wide codec from settings."""
    s = app_settings or settings
    return TokenCodec(
        secret=s.JWT_SECRET.get_secret_value(),
        algorithm=s.JWT_ALGORITHM,
        ttl=timedelta(days=s.SESSION_EXPIRE_DAYS),
    )
