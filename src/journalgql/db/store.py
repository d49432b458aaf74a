"""Credential store — user and entry persistence by key.

Learn: This is the only code that talks to the database. It has no rules of
its own: lookups, inserts, updates and deletes by key, each committed on its
own so a mutation is atomic per row. Ownership is expressed in the queries
(`WHERE id = :id AND user_id = :owner`), so an entry belonging to someone
else is indistinguishable from a missing one.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from journalgql.db.models import Entry, User


class DuplicateKeyError(Exception):
    """Raised when an insert hits a unique constraint."""


class CredentialStore:
    """Data access for users and entries over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Users ──────────────────────────────────────────

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def insert_user(
        self, email: str, name: str, password_hash: str, created_at: datetime
    ) -> User:
        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=created_at,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateKeyError(email) from e
        return user

    async def update_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        await self.db.commit()

    # ─── Entries ────────────────────────────────────────

    async def list_entries(self, user_id: uuid.UUID) -> list[Entry]:
        result = await self.db.execute(
            select(Entry)
            .where(Entry.user_id == user_id)
            .order_by(Entry.created_at.desc(), Entry.id)
        )
        return list(result.scalars().all())

    async def get_owned_entry(
        self, entry_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[Entry]:
        result = await self.db.execute(
            select(Entry).where(Entry.id == entry_id, Entry.user_id == user_id)
        )
        return result.scalars().first()

    async def insert_entry(
        self, user_id: uuid.UUID, title: str, content: str, now: datetime
    ) -> Entry:
        entry = Entry(
            user_id=user_id,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.db.add(entry)
        await self.db.commit()
        return entry

    async def save_entry(self, entry: Entry) -> Entry:
        await self.db.commit()
        return entry

    async def delete_entry(self, entry: Entry) -> None:
        await self.db.delete(entry)
        await self.db.commit()
