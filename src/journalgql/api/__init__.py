"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: There is no route-level auth. The GraphQL endpoint is open; the
authorization gate attaches an identity (or None) to every request, and
each use case decides whether it needs one.
"""

from fastapi import APIRouter

from journalgql.api.graphql import build_graphql_router
from journalgql.api.health import router as health_router


def build_api_router() -> APIRouter:
    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(health_router, tags=["health"])
    return api_router


__all__ = ["build_api_router", "build_graphql_router"]
