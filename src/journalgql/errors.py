"""Use-case results and the error taxonomy.

Learn: Use cases never raise for expected failures. They return either
Ok(value) or Err(ServiceError), so every failure path is a value a caller
(or a test) can match on. Only the GraphQL layer turns an Err into a
GraphQL error entry; only truly unexpected exceptions (storage down,
signing broken) travel as exceptions, and those become INTERNAL_ERROR.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Machine-readable code exposed as `extensions.code`."""

    VALIDATION = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND_OR_FORBIDDEN = "NOT_FOUND_OR_FORBIDDEN"
    INTERNAL = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ServiceError:
    """A failed use case: one code plus the field-level messages."""

    code: ErrorCode
    messages: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return ", ".join(self.messages) if self.messages else self.code.value


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ServiceError


Result = Union[Ok[T], Err]


# ─── Constructors for the common failures ───────────────


def validation_error(messages: list[str]) -> Err:
    return Err(ServiceError(ErrorCode.VALIDATION, list(messages)))


def duplicate_email() -> Err:
    return Err(
        ServiceError(ErrorCode.DUPLICATE_EMAIL, ["User with this email already exists"])
    )


def invalid_credentials(message: str = "Invalid email or password") -> Err:
    return Err(ServiceError(ErrorCode.INVALID_CREDENTIALS, [message]))


def unauthenticated() -> Err:
    return Err(
        ServiceError(ErrorCode.UNAUTHENTICATED, ["Not authenticated. Please log in first."])
    )


def not_found_or_forbidden() -> Err:
    # Same text for "missing" and "someone else's" so existence never leaks.
    return Err(
        ServiceError(
            ErrorCode.NOT_FOUND_OR_FORBIDDEN,
            ["Entry not found or you don't have permission to access it"],
        )
    )
