"""Domain-level error types shared by adapters, stores and the UI boundary.

Adapters raise these when a request fails for a known, expected reason
(uniqueness conflict, server-side validation, backend failure). Stores and the
web runtime convert them into exactly one user notification.

Classification goes through the explicit ``kind`` discriminator rather than
``isinstance`` so an error keeps its category after being re-raised, chained
(``raise ... from``) or handed across a callback boundary. Implicit exception
context never counts as wrapping.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional


class ErrorKind(str, Enum):
    """Stable discriminator values carried by every :class:`DomainError`."""

    GENERIC = "generic"
    DUPLICATE = "duplicate"
    VALIDATION = "validation"
    SERVER = "server"
    # Never set on a DomainError; returned by ``error_kind`` for anything else.
    UNCLASSIFIED = "unclassified"


class DomainError(Exception):
    """Base class for expected, classified business-logic failures.

    Attributes:
        developer_message: Diagnostic text for logs.
        user_message: Optional text that is safe to display to the user.
        kind: Discriminator identifying the failure category.
    """

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, developer_message: str, user_message: Optional[str] = None) -> None:
        super().__init__(developer_message)
        self.developer_message = developer_message
        self.user_message = user_message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"developer_message={self.developer_message!r}, "
            f"user_message={self.user_message!r})"
        )


class DuplicateEntityError(DomainError):
    """A uniqueness constraint was violated by the backing store."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, user_message: Optional[str] = None) -> None:
        super().__init__("Duplicate entity error", user_message)


class ValidationError(DomainError):
    """The server rejected input that the console had already validated.

    This only happens when client-side validation disagrees with the API, so
    the raw server messages are exposed to make the mismatch visible.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, validation_messages: Iterable[str]) -> None:
        messages: List[str] = [str(msg) for msg in validation_messages]
        super().__init__(
            "Validation error",
            "Unexpected server response: " + "; ".join(messages),
        )
        self.validation_messages = messages


class ServerError(DomainError):
    """A 5xx-class or otherwise unexpected backend failure."""

    kind = ErrorKind.SERVER

    def __init__(self, user_message: Optional[str] = None) -> None:
        super().__init__("Server error", user_message)


def _kind_of(exc: BaseException) -> Optional[ErrorKind]:
    raw = getattr(exc, "kind", None)
    if isinstance(raw, ErrorKind) and raw is not ErrorKind.UNCLASSIFIED:
        return raw
    if isinstance(raw, str):
        try:
            value = ErrorKind(raw)
        except ValueError:
            return None
        return None if value is ErrorKind.UNCLASSIFIED else value
    return None


def find_domain_error(exc: Optional[BaseException]) -> Optional[BaseException]:
    """Return the first exception in the explicit ``__cause__`` chain carrying a kind.

    Only ``raise ... from`` counts as wrapping. An error raised while a domain
    error is being handled keeps its own classification, and
    ``raise ... from None`` ends the walk.
    """
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if _kind_of(current) is not None:
            return current
        current = current.__cause__
    return None


def error_kind(exc: Optional[BaseException]) -> ErrorKind:
    """Return the discriminator for ``exc`` or ``UNCLASSIFIED``."""
    found = find_domain_error(exc)
    if found is None:
        return ErrorKind.UNCLASSIFIED
    return _kind_of(found) or ErrorKind.UNCLASSIFIED


def is_domain_error(exc: Optional[BaseException], kind: Optional[ErrorKind] = None) -> bool:
    """Return True when ``exc`` (or an exception it wraps) is a domain error.

    When ``kind`` is given the discriminator must match as well.
    """
    found = error_kind(exc)
    if found is ErrorKind.UNCLASSIFIED:
        return False
    return kind is None or found is kind


__all__ = [
    "DomainError",
    "DuplicateEntityError",
    "ErrorKind",
    "ServerError",
    "ValidationError",
    "error_kind",
    "find_domain_error",
    "is_domain_error",
]
