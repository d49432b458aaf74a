"""FastAPI dependencies shared by the HTTP routes.

Learn: The container lives on app.state (set by create_app), so routes get
it through the request instead of importing a global. get_db yields one
session per request and closes it when the request is done.
"""

from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from journalgql.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


async def get_db(
    container: ServiceContainer = Depends(get_container),
) -> AsyncIterator[AsyncSession]:
    """Yields a session per request, auto-closes."""
    async with container.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
