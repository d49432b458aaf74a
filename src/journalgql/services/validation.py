"""Input rules for users and entries.

Each validator returns the list of problems it found (empty = valid), so a
caller can report every broken field at once instead of one per round trip.
"""

import re
from typing import Optional

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MIN, NAME_MAX = 2, 100
PASSWORD_MIN, PASSWORD_MAX = 6, 128
TITLE_MAX = 200
CONTENT_MAX = 50_000


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_password(password: str) -> list[str]:
    if not password:
        return ["Password is required"]
    if len(password) < PASSWORD_MIN:
        return [f"Password must be at least {PASSWORD_MIN} characters"]
    if len(password) > PASSWORD_MAX:
        return [f"Password must be at most {PASSWORD_MAX} characters"]
    return []


def validate_registration(email: str, name: str, password: str) -> list[str]:
    """Validate already-trimmed email and name plus the raw password."""
    errors: list[str] = []

    if not email:
        errors.append("Email is required")
    elif not is_valid_email(email):
        errors.append("Email format is invalid")

    if not name:
        errors.append("Name is required")
    elif len(name) < NAME_MIN:
        errors.append(f"Name must be at least {NAME_MIN} characters")
    elif len(name) > NAME_MAX:
        errors.append(f"Name must be at most {NAME_MAX} characters")

    errors.extend(validate_password(password))
    return errors


def _title_errors(title: str, empty_message: str) -> list[str]:
    if not title:
        return [empty_message]
    if len(title) > TITLE_MAX:
        return [f"Title must be at most {TITLE_MAX} characters"]
    return []


def _content_errors(content: str) -> list[str]:
    if len(content) > CONTENT_MAX:
        return [f"Content must be at most {CONTENT_MAX:,} characters"]
    return []


def validate_new_entry(title: str, content: str) -> list[str]:
    """Validate a trimmed title and raw content for a new entry."""
    return _title_errors(title, "Title is required") + _content_errors(content)


def validate_entry_update(
    title: Optional[str], content: Optional[str]
) -> list[str]:
    """Validate a partial update. None means "field not provided"."""
    errors: list[str] = []
    if title is not None:
        errors.extend(_title_errors(title, "Title cannot be empty"))
    if content is not None:
        errors.extend(_content_errors(content))
    if title is None and content is None:
        errors.append("At least one field (title or content) must be provided for update")
    return errors
