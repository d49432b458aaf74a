"""Authorization gate — bearer token to acting identity.

Learn: The gate answers one question: "who is making this request?" The
answer is an Identity or None. None is not an error here; `register`,
`login` and `me` all work anonymously. Which operations insist on an
identity is each use case's business, not the gate's.

So the gate never raises. A missing header, a garbage token, a bad
signature, an expired token, a user that no longer exists, even a database
hiccup during the lookup: all of them mean "anonymous".
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from journalgql.auth.jwt import TokenService
from journalgql.db.store import CredentialStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class Identity:
    """The authenticated user making the request."""

    id: uuid.UUID
    email: str
    name: str
    created_at: datetime


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AuthorizationGate:
    """Resolves an optional bearer token into an Identity or None."""

    def __init__(self, tokens: TokenService, store: CredentialStore):
        self.tokens = tokens
        self.store = store

    async def resolve(self, authorization: Optional[str]) -> Optional[Identity]:
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        claims = self.tokens.verify(token)
        if claims is None:
            return None

        try:
            user = await self.store.get_user(claims.user_id)
        except Exception as e:
            # driver-level errors (refused connections) are not wrapped by SQLAlchemy
            logger.warning("auth.identity_lookup_failed", error=repr(e))
            return None

        if user is None:
            logger.debug("auth.unknown_user", user_id=str(claims.user_id))
            return None

        return Identity(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )
