"""Entry service — journal entries scoped to their owner.

Learn: Every method takes the caller's Identity and refuses to run without
one. All reads and writes filter on `user_id = identity.id`, and "not
found" and "not yours" collapse into a single NOT_FOUND_OR_FORBIDDEN so
nobody can learn whether someone else's entry id exists.
"""

import uuid
from typing import Optional

import structlog

from journalgql.auth.dependencies import Identity
from journalgql.auth.jwt import Clock
from journalgql.db.models import Entry
from journalgql.db.store import CredentialStore
from journalgql.errors import (
    Ok,
    Result,
    not_found_or_forbidden,
    unauthenticated,
    validation_error,
)
from journalgql.services.validation import validate_entry_update, validate_new_entry

logger = structlog.get_logger()


def parse_entry_id(raw: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw))
    except (ValueError, TypeError, AttributeError):
        return None


class EntryService:
    """Business logic for journal entries."""

    def __init__(self, store: CredentialStore, clock: Clock):
        self.store = store
        self.clock = clock

    async def my_entries(self, identity: Optional[Identity]) -> Result[list[Entry]]:
        """All of the caller's entries, newest first."""
        if identity is None:
            return unauthenticated()
        return Ok(await self.store.list_entries(identity.id))

    async def create(
        self, identity: Optional[Identity], title: str, content: str = ""
    ) -> Result[Entry]:
        if identity is None:
            return unauthenticated()

        title = title.strip()
        content = content or ""
        errors = validate_new_entry(title, content)
        if errors:
            return validation_error(errors)

        entry = await self.store.insert_entry(
            user_id=identity.id,
            title=title,
            content=content,
            now=self.clock(),
        )
        logger.info("entries.created", entry_id=str(entry.id), user_id=str(identity.id))
        return Ok(entry)

    async def update(
        self,
        identity: Optional[Identity],
        entry_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Result[Entry]:
        """Apply a partial update. Only the fields given change."""
        if identity is None:
            return unauthenticated()

        if title is not None:
            title = title.strip()
        errors = validate_entry_update(title, content)
        if errors:
            return validation_error(errors)

        entry = await self._owned_entry(identity, entry_id)
        if entry is None:
            return not_found_or_forbidden()

        if title is not None:
            entry.title = title
        if content is not None:
            entry.content = content
        entry.updated_at = self.clock()
        await self.store.save_entry(entry)

        logger.info("entries.updated", entry_id=str(entry.id), user_id=str(identity.id))
        return Ok(entry)

    async def delete(self, identity: Optional[Identity], entry_id: str) -> Result[bool]:
        if identity is None:
            return unauthenticated()

        entry = await self._owned_entry(identity, entry_id)
        if entry is None:
            return not_found_or_forbidden()

        await self.store.delete_entry(entry)
        logger.info("entries.deleted", entry_id=entry_id, user_id=str(identity.id))
        return Ok(True)

    async def _owned_entry(self, identity: Identity, entry_id: str) -> Optional[Entry]:
        parsed = parse_entry_id(entry_id)
        if parsed is None:
            return None
        return await self.store.get_owned_entry(parsed, identity.id)
