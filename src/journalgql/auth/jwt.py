"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. One token
type only: issued at register/login, valid for 7 days, no refresh. When it
expires the user logs in again. Nothing is stored server-side, so there is
no revocation either: a token is good until `exp`.

The token carries the user id (`sub`) and email. Expiry is checked against
the injected clock rather than the wall clock so tests can move time.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
import structlog

logger = structlog.get_logger()

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class TokenError(Exception):
    """Raised when a token cannot be created."""


@dataclass(frozen=True)
class TokenClaims:
    """The verified content of a session token."""

    user_id: uuid.UUID
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Clock = system_clock,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    def issue(self, user_id: uuid.UUID | str, email: str) -> str:
        """Create a signed token for a user. Raises TokenError on failure."""
        now = self.clock()
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self.ttl,
        }
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenError(f"Could not sign token: {e}") from e

    def verify(self, token: str) -> Optional[TokenClaims]:
        """Decode and check a token.

        Returns the claims on success, None when the token is malformed,
        badly signed, incomplete, or expired. Never raises.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                # exp is checked below against self.clock
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp", "iat"],
                },
            )
            user_id = uuid.UUID(str(payload["sub"]))
            email = payload.get("email")
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (jwt.PyJWTError, ValueError, TypeError, OverflowError) as e:
            logger.debug("token.rejected", reason=str(e))
            return None

        if not isinstance(email, str):
            logger.debug("token.rejected", reason="missing email claim")
            return None
        if expires_at <= self.clock():
            logger.debug("token.expired", user_id=str(user_id))
            return None

        return TokenClaims(
            user_id=user_id,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )
