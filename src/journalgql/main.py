"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. The service container is built here, eagerly, and parked on
app.state; lifespan only logs startup and disposes the engine on shutdown.
(Building the container outside lifespan means in-process test clients,
which never run lifespan events, still get a fully wired app.)

Run it with the factory flag, or via the CLI:
    uvicorn journalgql.main:create_app --factory
    journalgql serve
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journalgql import __version__
from journalgql.api import build_api_router, build_graphql_router
from journalgql.config import Settings, get_settings
from journalgql.container import ServiceContainer
from journalgql.logging_config import configure_logging
from journalgql.middleware.request_id import RequestIdMiddleware
from journalgql.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    container: ServiceContainer = app.state.container
    logger.info(
        "journalgql.starting",
        version=__version__,
        environment=container.settings.environment,
        port=container.settings.port,
    )

    yield

    logger.info("journalgql.shutdown")
    await container.dispose()


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    if container is None:
        settings = settings or get_settings()
        container = ServiceContainer.from_settings(settings)
    settings = container.settings

    configure_logging(settings)

    app = FastAPI(
        title="Journal GraphQL API",
        description="Personal journaling backend — accounts and private entries over GraphQL",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(build_api_router())
    app.include_router(build_graphql_router(debug=settings.debug), prefix="/graphql")

    return app
