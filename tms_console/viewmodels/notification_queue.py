"""Ordered, self-expiring queue of user-visible notifications.

One instance is created by the composition root and shared by every store and
the toast area of the UI. Items are kept in insertion order (oldest first);
each one is removed either explicitly or by a one-shot timer after
``expiry_s`` seconds, whichever happens first.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..domain.notifications import (
    DEFAULT_TITLES,
    Notification,
    NotificationId,
    NotificationType,
)
from ..domain.ports import TimerPort, TimerToken

DEFAULT_EXPIRY_S = 10.0


class NotificationQueue:
    """Owns visible notifications and their expiry timers.

    ``add`` and ``remove`` must be called from the timer's execution context
    (the UI loop); the queue itself does no locking.
    """

    def __init__(
        self,
        timer: TimerPort,
        *,
        expiry_s: float = DEFAULT_EXPIRY_S,
        on_change: Optional[Callable[[Tuple[Notification, ...]], None]] = None,
    ) -> None:
        if expiry_s <= 0:
            raise ValueError("expiry_s must be positive.")
        self._timer = timer
        self.expiry_s = float(expiry_s)
        self.on_change = on_change
        self._items: List[Notification] = []
        self._timers: Dict[NotificationId, TimerToken] = {}
        # Ids come from a per-queue counter so they are never reused.
        self._ids = itertools.count(1)
        self._log = logging.getLogger(__name__)

    @property
    def items(self) -> Tuple[Notification, ...]:
        """Current notifications, oldest first."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, notification_id: object) -> bool:
        return any(item.id == notification_id for item in self._items)

    def add(self, title: str, message: str, type: NotificationType) -> NotificationId:
        """Append a notification and schedule its expiry; return its id."""
        notification = Notification(
            id=f"n{next(self._ids)}",
            title=str(title),
            message=str(message),
            type=NotificationType(type),
        )
        self._items.append(notification)
        self._timers[notification.id] = self._timer.schedule_after(
            self.expiry_s, lambda: self._expire(notification.id)
        )
        self._log.debug("Notification %s added (%s): %s", notification.id, notification.type.value, message)
        self._emit()
        return notification.id

    def remove(self, notification_id: NotificationId) -> None:
        """Remove a notification by id; unknown ids are ignored."""
        token = self._timers.pop(notification_id, None)
        if token is not None:
            self._timer.cancel(token)
        self._discard(notification_id)

    def clear(self) -> None:
        """Remove every notification and cancel all pending expiries."""
        for token in self._timers.values():
            self._timer.cancel(token)
        self._timers.clear()
        if self._items:
            self._items.clear()
            self._emit()

    def success(self, message: str, title: Optional[str] = None) -> NotificationId:
        return self._add_typed(NotificationType.SUCCESS, message, title)

    def error(self, message: str, title: Optional[str] = None) -> NotificationId:
        return self._add_typed(NotificationType.ERROR, message, title)

    def warning(self, message: str, title: Optional[str] = None) -> NotificationId:
        return self._add_typed(NotificationType.WARNING, message, title)

    def info(self, message: str, title: Optional[str] = None) -> NotificationId:
        return self._add_typed(NotificationType.INFO, message, title)

    # ------------------------------------------------------------------
    def _add_typed(
        self, kind: NotificationType, message: str, title: Optional[str]
    ) -> NotificationId:
        return self.add(title if title is not None else DEFAULT_TITLES[kind], message, kind)

    def _expire(self, notification_id: NotificationId) -> None:
        self._timers.pop(notification_id, None)
        self._discard(notification_id)

    def _discard(self, notification_id: NotificationId) -> None:
        for index, item in enumerate(self._items):
            if item.id == notification_id:
                del self._items[index]
                self._emit()
                return

    def _emit(self) -> None:
        if self.on_change:
            self.on_change(self.items)


__all__ = ["DEFAULT_EXPIRY_S", "NotificationQueue"]
