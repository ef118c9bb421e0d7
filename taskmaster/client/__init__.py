"""Client-side reconciliation of fetched and pushed notifications."""

from .api import NotificationsApi
from .state import (
    ClientNotification,
    LoadFailed,
    LoadStarted,
    MarkAllReadRequested,
    MarkReadFailed,
    MarkReadRequested,
    NotificationPushed,
    NotificationsLoaded,
    NotificationState,
    reduce,
)
from .store import NotificationSource, NotificationStore

__all__ = [
    "ClientNotification",
    "LoadFailed",
    "LoadStarted",
    "MarkAllReadRequested",
    "MarkReadFailed",
    "MarkReadRequested",
    "NotificationPushed",
    "NotificationSource",
    "NotificationState",
    "NotificationStore",
    "NotificationsApi",
    "reduce",
]
