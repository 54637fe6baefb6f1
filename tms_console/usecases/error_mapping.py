"""Translate service-layer failures into user-facing notification text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tms_console.domain.errors import ErrorKind, error_kind, find_domain_error

GENERIC_DOMAIN_MESSAGE = "The request could not be completed."
UNCLASSIFIED_MESSAGE = "Operation failed. Please try again."


@dataclass(frozen=True)
class FailureDescription:
    """Outcome of classifying one failed service call.

    Attributes:
        kind: Discriminator of the failure (``UNCLASSIFIED`` for unknown errors).
        title: Notification title naming the operation.
        message: Text safe to show to the user.
    """

    kind: ErrorKind
    title: str
    message: str

    @property
    def classified(self) -> bool:
        return self.kind is not ErrorKind.UNCLASSIFIED


def describe_failure(exc: BaseException, *, operation: str) -> FailureDescription:
    """Classify ``exc`` and compose the notification for a failed operation.

    Args:
        exc: Exception raised by the service call (possibly wrapping a
            domain error through ``raise ... from``).
        operation: Human-readable operation name, e.g. ``"Add tenant"``.

    Returns:
        FailureDescription: kind, title and message for the notification.
    """
    kind = error_kind(exc)
    title = _compose_title(operation)
    if kind is ErrorKind.UNCLASSIFIED:
        return FailureDescription(kind=kind, title=title, message=UNCLASSIFIED_MESSAGE)

    domain_error = find_domain_error(exc)
    user_message = _clean(getattr(domain_error, "user_message", None))
    return FailureDescription(
        kind=kind,
        title=title,
        message=user_message or GENERIC_DOMAIN_MESSAGE,
    )


def _compose_title(operation: str) -> str:
    label = (operation or "").strip()
    if not label:
        return "Error"
    return f"{label} failed"


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    stripped = str(text).strip()
    return stripped or None


__all__ = [
    "FailureDescription",
    "GENERIC_DOMAIN_MESSAGE",
    "UNCLASSIFIED_MESSAGE",
    "describe_failure",
]
