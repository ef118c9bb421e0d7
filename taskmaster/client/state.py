"""Pure state transitions for the client-side notification list.

Every change to the list is expressed as an event and applied by
:func:`reduce`. The unread counter is never stored; it is derived from the
list each time it is read, so optimistic flips, pushes and reverts can
interleave without the counter drifting from the records.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Union

from taskmaster.domain.entities import NotificationKind


@dataclass(frozen=True)
class ClientNotification:
    """A notification as held by the client."""

    id: str
    user_id: str
    type: NotificationKind
    title: str
    message: str
    read: bool
    created_at: datetime
    metadata: dict[str, Any] | None = field(default=None, compare=False)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "ClientNotification":
        """Build a record from its camelCase JSON representation."""

        created_at = datetime.fromisoformat(str(data["createdAt"]).replace("Z", "+00:00"))
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            type=NotificationKind(data["type"]),
            title=data["title"],
            message=data["message"],
            read=bool(data.get("read", False)),
            created_at=created_at,
            metadata=data.get("metadata"),
        )


@dataclass(frozen=True)
class NotificationState:
    notifications: tuple[ClientNotification, ...] = ()
    loading: bool = False
    error: str | None = None

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.read)

    def get(self, notification_id: str) -> ClientNotification | None:
        for notification in self.notifications:
            if notification.id == notification_id:
                return notification
        return None


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class NotificationsLoaded:
    """The server list resolved; merged with whatever is held locally."""

    notifications: tuple[ClientNotification, ...]


@dataclass(frozen=True)
class LoadFailed:
    error: str


@dataclass(frozen=True)
class NotificationPushed:
    notification: ClientNotification


@dataclass(frozen=True)
class MarkReadRequested:
    notification_id: str


@dataclass(frozen=True)
class MarkReadFailed:
    notification_id: str


@dataclass(frozen=True)
class MarkAllReadRequested:
    pass


NotificationEvent = Union[
    LoadStarted,
    NotificationsLoaded,
    LoadFailed,
    NotificationPushed,
    MarkReadRequested,
    MarkReadFailed,
    MarkAllReadRequested,
]


def _newest_first(
    notifications: list[ClientNotification],
) -> tuple[ClientNotification, ...]:
    return tuple(sorted(notifications, key=lambda item: item.created_at, reverse=True))


def _set_read(
    state: NotificationState, notification_id: str, read: bool
) -> NotificationState:
    current = state.get(notification_id)
    if current is None or current.read is read:
        return state
    return replace(
        state,
        notifications=tuple(
            replace(item, read=read) if item.id == notification_id else item
            for item in state.notifications
        ),
    )


def reduce(state: NotificationState, event: NotificationEvent) -> NotificationState:
    """Return the state that results from applying ``event`` to ``state``."""

    if isinstance(event, LoadStarted):
        return replace(state, loading=True, error=None)

    if isinstance(event, NotificationsLoaded):
        # Records that arrived by push after the request was issued are kept.
        server_ids = {item.id for item in event.notifications}
        local_only = [item for item in state.notifications if item.id not in server_ids]
        return replace(
            state,
            notifications=_newest_first([*event.notifications, *local_only]),
            loading=False,
            error=None,
        )

    if isinstance(event, LoadFailed):
        return replace(state, loading=False, error=event.error)

    if isinstance(event, NotificationPushed):
        if state.get(event.notification.id) is not None:
            return state
        pushed = replace(event.notification, read=False)
        return replace(
            state, notifications=_newest_first([pushed, *state.notifications])
        )

    if isinstance(event, MarkReadRequested):
        return _set_read(state, event.notification_id, True)

    if isinstance(event, MarkReadFailed):
        return _set_read(state, event.notification_id, False)

    if isinstance(event, MarkAllReadRequested):
        if state.unread_count == 0:
            return state
        return replace(
            state,
            notifications=tuple(replace(item, read=True) for item in state.notifications),
        )

    raise TypeError(f"Unsupported notification event: {event!r}")


__all__ = [
    "ClientNotification",
    "LoadFailed",
    "LoadStarted",
    "MarkAllReadRequested",
    "MarkReadFailed",
    "MarkReadRequested",
    "NotificationEvent",
    "NotificationPushed",
    "NotificationState",
    "NotificationsLoaded",
    "reduce",
]
