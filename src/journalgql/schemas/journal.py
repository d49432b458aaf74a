"""GraphQL object types for users, entries, and auth payloads.

Learn: Strawberry turns these dataclass-like classes into GraphQL types and
camelCases the field names (created_at -> createdAt). They are output-only
views: the User type has no password field at all, so a hash can't be
selected even by accident.

Timestamps go out as ISO-8601 UTC strings with millisecond precision
(`2026-01-31T09:15:00.000Z`).
"""

from datetime import datetime, timezone

import strawberry


def iso_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    stamp = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


@strawberry.type
class User:
    id: strawberry.ID
    email: str
    name: str
    created_at: str

    @classmethod
    def from_model(cls, user) -> "User":
        """Build from anything with id/email/name/created_at (ORM row or Identity)."""
        return cls(
            id=strawberry.ID(str(user.id)),
            email=user.email,
            name=user.name,
            created_at=iso_timestamp(user.created_at),
        )


@strawberry.type
class Entry:
    id: strawberry.ID
    user_id: strawberry.ID
    title: str
    content: str
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, entry) -> "Entry":
        return cls(
            id=strawberry.ID(str(entry.id)),
            user_id=strawberry.ID(str(entry.user_id)),
            title=entry.title,
            content=entry.content,
            created_at=iso_timestamp(entry.created_at),
            updated_at=iso_timestamp(entry.updated_at),
        )


@strawberry.type
class AuthPayload:
    token: str
    user: User
