"""Notification value objects rendered by the console's toast area."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NotificationId = str


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


DEFAULT_TITLES = {
    NotificationType.SUCCESS: "Success",
    NotificationType.ERROR: "Error",
    NotificationType.WARNING: "Warning",
    NotificationType.INFO: "Info",
}


@dataclass(frozen=True)
class Notification:
    """Immutable user-visible message owned by a notification queue."""

    id: NotificationId
    title: str
    message: str
    type: NotificationType


__all__ = ["DEFAULT_TITLES", "Notification", "NotificationId", "NotificationType"]
