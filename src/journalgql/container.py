"""Service container — the app's dependencies, built once and passed around.

Learn: Nothing on the request path reaches for a module-level singleton.
create_app() builds one ServiceContainer (engine, session factory, password
hasher, token service, clock) and stores it on app.state; each request
borrows a session from it and gets fresh per-request services wired to
that session. Tests build their own container with SQLite and a fake clock.
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from journalgql.auth.dependencies import AuthorizationGate
from journalgql.auth.jwt import Clock, TokenService, system_clock
from journalgql.auth.password import PasswordHasher
from journalgql.config import Settings
from journalgql.db.engine import build_engine, build_session_factory
from journalgql.db.store import CredentialStore
from journalgql.services.auth_service import AuthService
from journalgql.services.entry_service import EntryService


class ServiceContainer:
    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        hasher: PasswordHasher,
        tokens: TokenService,
        clock: Clock = system_clock,
    ):
        self.settings = settings
        self.engine = engine
        self.session_factory = session_factory
        self.hasher = hasher
        self.tokens = tokens
        self.clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Clock = system_clock,
        engine: Optional[AsyncEngine] = None,
    ) -> "ServiceContainer":
        engine = engine or build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
            tokens=TokenService(
                secret=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                ttl=timedelta(days=settings.token_expire_days),
                clock=clock,
            ),
            clock=clock,
        )

    # ─── Per-request wiring ─────────────────────────────

    def gate(self, store: CredentialStore) -> AuthorizationGate:
        return AuthorizationGate(self.tokens, store)

    def auth_service(self, store: CredentialStore) -> AuthService:
        return AuthService(store, self.hasher, self.tokens, self.clock)

    def entry_service(self, store: CredentialStore) -> EntryService:
        return EntryService(store, self.clock)

    async def dispose(self) -> None:
        await self.engine.dispose()
