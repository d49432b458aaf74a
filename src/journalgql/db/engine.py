"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access. The engine is built from an
explicit Settings object by the service container rather than at import
time, so tests can point it at SQLite without touching env vars.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from journalgql.config import Settings
from journalgql.db.models import Base


def build_engine(settings: Settings, **kwargs) -> AsyncEngine:
    """Create the async engine. echo=True in debug to see SQL queries."""
    options = {"echo": settings.debug}
    if not settings.database_url.startswith("sqlite"):
        # Connection pool: min 5, max 20 connections.
        options.update(pool_size=5, max_overflow=15, pool_pre_ping=True)
    options.update(kwargs)
    return create_async_engine(settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory — each request gets its own session."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables from ORM metadata (development and tests)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
