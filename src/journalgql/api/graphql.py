"""GraphQL endpoint — schema, resolvers, and per-request context.

Learn: Resolvers here are thin. Each one pulls the typed RequestContext
(identity + per-request services), calls one use case, and unwraps the
result:
- Ok(value)  -> the GraphQL type for value
- Err(error) -> a GraphQL error with extensions {code, messages}
- anything raised -> logged with traceback, reported as a generic
  INTERNAL_ERROR so storage/driver details never reach the client

The context getter is a FastAPI dependency, so the DB session and the
Authorization header come in through the usual Depends()/Header() wiring.
"""

from typing import Awaitable, Optional, TypeVar

import strawberry
import structlog
from fastapi import Depends, Header
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext, GraphQLRouter
from strawberry.types import Info

from journalgql.api.deps import get_container, get_db
from journalgql.auth.dependencies import Identity
from journalgql.container import ServiceContainer
from journalgql.db.store import CredentialStore
from journalgql.errors import Err, ErrorCode, Result
from journalgql.schemas.journal import AuthPayload, Entry, User
from journalgql.services.auth_service import AuthService
from journalgql.services.entry_service import EntryService

logger = structlog.get_logger()

T = TypeVar("T")


class RequestContext(BaseContext):
    """Everything a resolver may use: who is asking, and the services."""

    def __init__(
        self,
        identity: Optional[Identity],
        auth: AuthService,
        entries: EntryService,
    ):
        super().__init__()
        self.identity = identity
        self.auth = auth
        self.entries = entries


async def get_context(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> RequestContext:
    store = CredentialStore(db)
    identity = await container.gate(store).resolve(authorization)
    if identity is not None:
        structlog.contextvars.bind_contextvars(user_id=str(identity.id))
    return RequestContext(
        identity=identity,
        auth=container.auth_service(store),
        entries=container.entry_service(store),
    )


async def unwrap(call: Awaitable[Result[T]]) -> T:
    """Await a use case and turn its result into a value or a GraphQL error."""
    try:
        result = await call
    except Exception:
        logger.exception("graphql.internal_error")
        raise GraphQLError(
            "Internal server error",
            extensions={"code": ErrorCode.INTERNAL.value},
        ) from None

    if isinstance(result, Err):
        raise GraphQLError(
            result.error.message,
            extensions={
                "code": result.error.code.value,
                "messages": list(result.error.messages),
            },
        )
    return result.value


def _auth_payload(payload) -> AuthPayload:
    return AuthPayload(token=payload.token, user=User.from_model(payload.user))


# ─── Queries ────────────────────────────────────────────


@strawberry.type
class Query:
    @strawberry.field(description="The logged-in user, or null when anonymous.")
    async def me(self, info: Info[RequestContext, None]) -> Optional[User]:
        identity = info.context.identity
        return User.from_model(identity) if identity else None

    @strawberry.field(description="The caller's entries, newest first.")
    async def my_entries(self, info: Info[RequestContext, None]) -> list[Entry]:
        ctx = info.context
        entries = await unwrap(ctx.entries.my_entries(ctx.identity))
        return [Entry.from_model(e) for e in entries]


# ─── Mutations ──────────────────────────────────────────


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def register(
        self, info: Info[RequestContext, None], email: str, password: str, name: str
    ) -> AuthPayload:
        payload = await unwrap(info.context.auth.register(email, name, password))
        return _auth_payload(payload)

    @strawberry.mutation
    async def login(
        self, info: Info[RequestContext, None], email: str, password: str
    ) -> AuthPayload:
        payload = await unwrap(info.context.auth.login(email, password))
        return _auth_payload(payload)

    @strawberry.mutation
    async def create_entry(
        self, info: Info[RequestContext, None], title: str, content: str = ""
    ) -> Entry:
        ctx = info.context
        entry = await unwrap(ctx.entries.create(ctx.identity, title, content))
        return Entry.from_model(entry)

    @strawberry.mutation
    async def update_entry(
        self,
        info: Info[RequestContext, None],
        id: strawberry.ID,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Entry:
        ctx = info.context
        entry = await unwrap(ctx.entries.update(ctx.identity, id, title, content))
        return Entry.from_model(entry)

    @strawberry.mutation
    async def delete_entry(self, info: Info[RequestContext, None], id: strawberry.ID) -> bool:
        ctx = info.context
        return await unwrap(ctx.entries.delete(ctx.identity, id))

    @strawberry.mutation
    async def change_password(
        self,
        info: Info[RequestContext, None],
        current_password: str,
        new_password: str,
    ) -> bool:
        ctx = info.context
        return await unwrap(
            ctx.auth.change_password(ctx.identity, current_password, new_password)
        )


class JournalSchema(strawberry.Schema):
    """Schema that only logs errors the use cases did not classify.

    Coded errors (bad input, wrong password, ...) are normal traffic, and
    INTERNAL_ERROR has already been logged with its traceback by unwrap().
    """

    def process_errors(self, errors, execution_context=None) -> None:
        unexpected = [e for e in errors if not (e.extensions or {}).get("code")]
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = JournalSchema(query=Query, mutation=Mutation)


def build_graphql_router(debug: bool = False) -> GraphQLRouter:
    """The /graphql route. GraphiQL is only served in debug mode."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if debug else None,
    )
