"""Test fixtures — a fresh in-memory database and a controllable clock per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI + Strawberry:

1. Each test gets its own SQLite in-memory engine. StaticPool keeps a single
   connection alive so every session (the test's and the app's) sees the
   same database, and the schema is created from the ORM metadata.
2. The service container is built explicitly with that engine and a
   FakeClock, so token expiry and updatedAt bumps are deterministic.
3. The HTTP client talks to the real app in-process through ASGITransport.
   Nothing is mocked: /graphql runs the real gate, services and store.

Service-level tests use the `store`/`auth_service`/`entry_service`
fixtures; API tests use `client`/`gql`. A test uses one or the other so
two sessions never interleave on the shared connection.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from journalgql.config import Settings
from journalgql.container import ServiceContainer
from journalgql.db.engine import build_engine, create_schema
from journalgql.db.store import CredentialStore
from journalgql.main import create_app

TEST_SECRET = "test-secret-do-not-use"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture()
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture()
def clock():
    return FakeClock()


@pytest_asyncio.fixture()
async def container(settings, clock):
    engine = build_engine(
        settings,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    container = ServiceContainer.from_settings(settings, clock=clock, engine=engine)
    try:
        yield container
    finally:
        await container.dispose()


@pytest_asyncio.fixture()
async def db_session(container):
    async with container.session_factory() as session:
        yield session


@pytest.fixture()
def store(db_session):
    return CredentialStore(db_session)


@pytest.fixture()
def auth_service(container, store):
    return container.auth_service(store)


@pytest.fixture()
def entry_service(container, store):
    return container.entry_service(store)


@pytest.fixture()
def gate(container, store):
    return container.gate(store)


@pytest.fixture()
def app(container):
    return create_app(container=container)


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def gql(client):
    """POST a GraphQL operation; returns the decoded {data, errors} body."""

    async def run(query: str, variables: dict | None = None, token: str | None = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        body = {"query": query}
        if variables is not None:
            body["variables"] = variables
        r = await client.post("/graphql", json=body, headers=headers)
        assert r.status_code == 200, r.text
        return r.json()

    return run
