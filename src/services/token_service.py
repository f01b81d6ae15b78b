"""Bearer token issuing and verification (JWT, HS256 by default)."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError
from domain.model.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str | None
    username: str | None
    issued_at: datetime | None
    expires_at: datetime


class TokenService:
    def __init__(self, secret_key: str, expires_in: int, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("Token signing secret is required")
        if expires_in <= 0:
            raise ValueError("Token lifetime must be positive")
        self._secret_key = secret_key
        self._expires_in = expires_in
        self._algorithm = algorithm

    def issue(self, user: User) -> str:
        """Create a signed token for ``user``."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "username": user.username,
            "iat": now,
            "exp": now + timedelta(seconds=self._expires_in),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate ``token``.

        Raises:
            InvalidTokenError: bad signature, malformed or expired token
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Invalid or expired token") from e

        subject = payload.get("sub")
        exp = payload.get("exp")
        if not subject or not isinstance(subject, str) or exp is None:
            raise InvalidTokenError("Invalid or expired token")

        iat = payload.get("iat")
        try:
            issued_at = datetime.fromtimestamp(iat, timezone.utc) if isinstance(iat, (int, float)) else None
            expires_at = datetime.fromtimestamp(exp, timezone.utc)
        except (OverflowError, OSError, TypeError, ValueError) as e:
            logger.debug(f"JWT timestamps out of range: {e}")
            raise InvalidTokenError("Invalid or expired token") from e

        return TokenClaims(
            subject=subject,
            email=payload.get("email"),
            username=payload.get("username"),
            issued_at=issued_at,
            expires_at=expires_at,
        )
