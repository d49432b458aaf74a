"""journalgql CLI — run the server, bootstrap a dev database.

Usage:
    journalgql serve                      # uvicorn on JOURNAL_HOST:JOURNAL_PORT
    journalgql serve --port 9000 --reload
    journalgql init-db                    # create tables from the ORM models

Production databases should be migrated with Alembic (`alembic upgrade head`);
init-db is the shortcut for local SQLite/Postgres scratch setups.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
import uvicorn
from pydantic import ValidationError

from journalgql.config import Settings, get_settings
from journalgql.db.engine import build_engine, create_schema


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        click.secho(f"Configuration error:\n{e}", fg="red", err=True)
        sys.exit(2)


@click.group()
@click.version_option(package_name="journalgql")
def cli():
    """Journal GraphQL API."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: JOURNAL_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: JOURNAL_PORT).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (dev only).")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    settings = _load_settings()
    uvicorn.run(
        "journalgql.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("init-db")
def init_db():
    """Create all tables in the configured database."""
    settings = _load_settings()

    async def _create():
        engine = build_engine(settings)
        try:
            await create_schema(engine)
        finally:
            await engine.dispose()

    asyncio.run(_create())
    click.secho("Database schema created.", fg="green")


def main():
    cli()


if __name__ == "__main__":
    main()
