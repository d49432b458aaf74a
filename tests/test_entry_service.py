"""Entry service tests — CRUD and owner isolation.

Learn: Two users per test where it matters. The core rule: user B can
never read, update or delete user A's entry, and the failure looks
exactly like a missing entry.
"""

import uuid

import pytest

from journalgql.auth.dependencies import Identity
from journalgql.errors import Err, ErrorCode, Ok


async def _identity(auth_service, email, name="Ann") -> Identity:
    user = (await auth_service.register(email, name, "secret1")).value.user
    return Identity(id=user.id, email=user.email, name=user.name, created_at=user.created_at)


@pytest.fixture()
def anonymous():
    return None


# ═══════════════════════════════════════════════════════════
# Create + list
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_then_list(auth_service, entry_service, clock):
    ann = await _identity(auth_service, "ann@x.com")

    created = (await entry_service.create(ann, "  Day1  ", "hi")).value
    listed = (await entry_service.my_entries(ann)).value

    assert created.title == "Day1"
    assert created.content == "hi"
    assert created.user_id == ann.id
    assert created.created_at == created.updated_at == clock.now
    assert [e.id for e in listed] == [created.id]
    assert listed[0].title == "Day1"
    assert listed[0].content == "hi"


@pytest.mark.asyncio
async def test_content_defaults_to_empty(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Title only")).value
    assert entry.content == ""


@pytest.mark.asyncio
async def test_list_is_newest_first(auth_service, entry_service, clock):
    ann = await _identity(auth_service, "ann@x.com")
    for title in ("first", "second", "third"):
        await entry_service.create(ann, title, "")
        clock.advance(minutes=1)

    titles = [e.title for e in (await entry_service.my_entries(ann)).value]
    assert titles == ["third", "second", "first"]


@pytest.mark.asyncio
async def test_list_only_own_entries(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    bob = await _identity(auth_service, "bob@x.com", "Bob")
    await entry_service.create(ann, "ann's", "")
    await entry_service.create(bob, "bob's", "")

    assert [e.title for e in (await entry_service.my_entries(ann)).value] == ["ann's"]
    assert [e.title for e in (await entry_service.my_entries(bob)).value] == ["bob's"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "title,content,message",
    [
        ("", "", "Title is required"),
        ("   ", "", "Title is required"),
        ("x" * 201, "", "Title must be at most 200 characters"),
        ("ok", "x" * 50_001, "Content must be at most 50,000 characters"),
    ],
)
async def test_create_validation(auth_service, entry_service, title, content, message):
    ann = await _identity(auth_service, "ann@x.com")
    result = await entry_service.create(ann, title, content)
    assert isinstance(result, Err)
    assert result.error.code == ErrorCode.VALIDATION
    assert result.error.messages == [message]
    assert (await entry_service.my_entries(ann)).value == []


@pytest.mark.asyncio
async def test_create_accepts_limits(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    result = await entry_service.create(ann, "x" * 200, "y" * 50_000)
    assert isinstance(result, Ok)


@pytest.mark.asyncio
async def test_anonymous_is_rejected_everywhere(entry_service, anonymous):
    entry_id = str(uuid.uuid4())
    results = [
        await entry_service.my_entries(anonymous),
        await entry_service.create(anonymous, "t", "c"),
        await entry_service.update(anonymous, entry_id, title="t"),
        await entry_service.delete(anonymous, entry_id),
    ]
    for result in results:
        assert isinstance(result, Err)
        assert result.error.code == ErrorCode.UNAUTHENTICATED


# ═══════════════════════════════════════════════════════════
# Update
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_title_only_keeps_content(auth_service, entry_service, clock):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value
    original_updated = entry.updated_at
    original_created = entry.created_at

    clock.advance(seconds=30)
    updated = (await entry_service.update(ann, str(entry.id), title="X")).value

    assert updated.title == "X"
    assert updated.content == "hi"
    assert updated.updated_at > original_updated
    assert updated.created_at == original_created


@pytest.mark.asyncio
async def test_update_content_only_keeps_title(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    updated = (await entry_service.update(ann, str(entry.id), content="")).value

    assert updated.title == "Day1"
    assert updated.content == ""


@pytest.mark.asyncio
async def test_update_requires_a_field(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    result = await entry_service.update(ann, str(entry.id))

    assert result.error.code == ErrorCode.VALIDATION
    assert result.error.messages == [
        "At least one field (title or content) must be provided for update"
    ]


@pytest.mark.asyncio
async def test_update_rejects_blank_title(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    result = await entry_service.update(ann, str(entry.id), title="   ")

    assert result.error.code == ErrorCode.VALIDATION
    assert result.error.messages == ["Title cannot be empty"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields,message",
    [
        ({"title": "x" * 201}, "Title must be at most 200 characters"),
        ({"content": "x" * 50_001}, "Content must be at most 50,000 characters"),
    ],
)
async def test_update_enforces_length_limits(auth_service, entry_service, fields, message):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    result = await entry_service.update(ann, str(entry.id), **fields)

    assert isinstance(result, Err)
    assert result.error.code == ErrorCode.VALIDATION
    assert result.error.messages == [message]
    stored = (await entry_service.my_entries(ann)).value[0]
    assert (stored.title, stored.content) == ("Day1", "hi")


@pytest.mark.asyncio
async def test_update_other_users_entry_looks_missing(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    bob = await _identity(auth_service, "bob@x.com", "Bob")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    foreign = await entry_service.update(bob, str(entry.id), title="pwned")
    missing = await entry_service.update(bob, str(uuid.uuid4()), title="pwned")
    malformed = await entry_service.update(bob, "not-a-uuid", title="pwned")

    assert foreign.error.code == ErrorCode.NOT_FOUND_OR_FORBIDDEN
    assert foreign.error == missing.error == malformed.error
    still = (await entry_service.my_entries(ann)).value[0]
    assert still.title == "Day1"


# ═══════════════════════════════════════════════════════════
# Delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_delete_own_entry(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    assert await entry_service.delete(ann, str(entry.id)) == Ok(True)
    assert (await entry_service.my_entries(ann)).value == []


@pytest.mark.asyncio
async def test_delete_other_users_entry_looks_missing(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    bob = await _identity(auth_service, "bob@x.com", "Bob")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    foreign = await entry_service.delete(bob, str(entry.id))
    missing = await entry_service.delete(bob, str(uuid.uuid4()))

    assert foreign.error.code == ErrorCode.NOT_FOUND_OR_FORBIDDEN
    assert foreign.error == missing.error
    assert len((await entry_service.my_entries(ann)).value) == 1


@pytest.mark.asyncio
async def test_delete_twice(auth_service, entry_service):
    ann = await _identity(auth_service, "ann@x.com")
    entry = (await entry_service.create(ann, "Day1", "hi")).value

    await entry_service.delete(ann, str(entry.id))
    again = await entry_service.delete(ann, str(entry.id))

    assert again.error.code == ErrorCode.NOT_FOUND_OR_FORBIDDEN
