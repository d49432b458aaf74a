"""Auth service — registration, login, password change.

Learn: Service layer separates business logic from the GraphQL resolvers.
Resolvers call services, services call the credential store. Every method
returns Ok/Err instead of raising, so tests can assert on failure kinds
directly without going through HTTP.

Login failures are deliberately vague: an unknown email and a wrong
password produce the exact same error, so the API can't be used to probe
which emails are registered.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from journalgql.auth.dependencies import Identity
from journalgql.auth.jwt import Clock, TokenService
from journalgql.auth.password import PasswordHasher
from journalgql.db.models import User
from journalgql.db.store import CredentialStore, DuplicateKeyError
from journalgql.errors import (
    Ok,
    Result,
    duplicate_email,
    invalid_credentials,
    unauthenticated,
    validation_error,
)
from journalgql.services.validation import validate_password, validate_registration

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuthPayload:
    token: str
    user: User


class AuthService:
    """Business logic for accounts and sessions."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        clock: Clock,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.clock = clock

    async def register(self, email: str, name: str, password: str) -> Result[AuthPayload]:
        email = email.strip()
        name = name.strip()

        errors = validate_registration(email, name, password)
        if errors:
            return validation_error(errors)

        if await self.store.get_user_by_email(email) is not None:
            logger.info("auth.register_duplicate")
            return duplicate_email()

        password_hash = await self.hasher.hash_async(password)
        try:
            user = await self.store.insert_user(
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=self.clock(),
            )
        except DuplicateKeyError:
            # Lost the check-then-insert race; the unique index caught it.
            logger.info("auth.register_duplicate", race=True)
            return duplicate_email()

        token = self.tokens.issue(user.id, user.email)
        logger.info("auth.registered", user_id=str(user.id))
        return Ok(AuthPayload(token=token, user=user))

    async def login(self, email: str, password: str) -> Result[AuthPayload]:
        user = await self.store.get_user_by_email(email.strip())
        if user is None or not await self.hasher.verify_async(password, user.password_hash):
            logger.info("auth.login_failed")
            return invalid_credentials()

        token = self.tokens.issue(user.id, user.email)
        logger.info("auth.login", user_id=str(user.id))
        return Ok(AuthPayload(token=token, user=user))

    async def change_password(
        self,
        identity: Optional[Identity],
        current_password: str,
        new_password: str,
    ) -> Result[bool]:
        """Replace the caller's password.

        Existing tokens stay valid until they expire; there is no
        server-side session list to revoke them from.
        """
        if identity is None:
            return unauthenticated()

        errors = validate_password(new_password)
        if errors:
            return validation_error(errors)
        if current_password == new_password:
            return validation_error(["New password must be different from current password"])

        user = await self.store.get_user(identity.id)
        if user is None:
            return unauthenticated()

        if not await self.hasher.verify_async(current_password, user.password_hash):
            logger.info("auth.change_password_failed", user_id=str(user.id))
            return invalid_credentials("Current password is incorrect")

        await self.store.update_password(user, await self.hasher.hash_async(new_password))
        logger.info("auth.password_changed", user_id=str(user.id))
        return Ok(True)
