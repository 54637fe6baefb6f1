"""Shared failure policy for state stores that call the service layer.

Every store operation runs its service call through :meth:`ServiceStore._run`:

1. ``loading`` is set before the call and reset in a ``finally``.
2. On success the caller's ``apply`` hook updates owned state.
3. On failure the error is classified once, exactly one ERROR notification
   is queued, and the error is re-raised or swallowed according to the
   operation's :class:`ErrorPolicy`.

Read operations use ``SWALLOW`` (the view keeps showing the previous state);
write operations use ``RAISE`` so the awaiting form can stay open.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, TypeVar

from ..usecases.error_mapping import describe_failure
from .notification_queue import NotificationQueue

T = TypeVar("T")
R = TypeVar("R")


class ErrorPolicy(str, Enum):
    RAISE = "raise"
    SWALLOW = "swallow"


class ServiceStore:
    """Base for stores: owns the ``loading`` flag and the failure policy."""

    def __init__(
        self,
        notifications: NotificationQueue,
        *,
        on_change: Optional[Callable[["ServiceStore"], None]] = None,
    ) -> None:
        self.notifications = notifications
        self.on_change = on_change
        self.loading = False
        self._log = logging.getLogger(type(self).__module__)

    def _run(
        self,
        operation: str,
        call: Callable[[], T],
        *,
        policy: ErrorPolicy,
        apply: Optional[Callable[[T], R]] = None,
        success_message: Optional[str] = None,
    ) -> Optional[R]:
        """Invoke ``call`` under the store failure policy.

        Args:
            operation: Human-readable name used in logs and the error title.
            call: Zero-argument service invocation.
            policy: Whether a failure is re-raised or swallowed.
            apply: Optional hook mapping the result onto store state; its
                return value becomes the operation's return value.
            success_message: Queued as a SUCCESS notification when given.

        Returns:
            The ``apply`` result (or the raw result when no hook is given);
            ``None`` when a swallowed failure occurred.
        """
        self.loading = True
        self._changed()
        try:
            result = call()
            value = apply(result) if apply is not None else result
        except Exception as exc:
            self._report_failure(operation, exc)
            if policy is ErrorPolicy.RAISE:
                raise
            return None
        finally:
            self.loading = False
            self._changed()
        if success_message:
            self.notifications.success(success_message)
        return value

    def _report_failure(self, operation: str, exc: Exception) -> None:
        failure = describe_failure(exc, operation=operation)
        if failure.classified:
            self._log.warning("%s failed (%s): %r", operation, failure.kind.value, exc)
        else:
            self._log.error("%s failed with unclassified error", operation, exc_info=exc)
        self.notifications.error(failure.message, title=failure.title)

    def _changed(self) -> None:
        if self.on_change:
            self.on_change(self)


__all__ = ["ErrorPolicy", "ServiceStore"]
