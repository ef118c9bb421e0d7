"""Client-side notification store reconciling fetched and pushed records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from .state import (
    ClientNotification,
    LoadFailed,
    LoadStarted,
    MarkAllReadRequested,
    MarkReadFailed,
    MarkReadRequested,
    NotificationEvent,
    NotificationPushed,
    NotificationsLoaded,
    NotificationState,
    reduce,
)

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"
TASK_UPDATE_EVENT = "task:update"

Listener = Callable[[NotificationState], None]
TaskUpdateListener = Callable[[str, dict[str, Any]], None]


class NotificationSource(Protocol):
    async def list(self) -> list[ClientNotification]: ...

    async def mark_read(self, notification_id: str) -> Any: ...

    async def mark_all_read(self) -> Any: ...


class NotificationStore:
    """Single writer of the local notification list.

    Loads, pushes and read-state changes all go through :meth:`_dispatch`,
    which runs the pure reducer and notifies listeners. Must be used from one
    event loop.
    """

    def __init__(self, api: NotificationSource) -> None:
        self._api = api
        self._state = NotificationState()
        self._listeners: list[Listener] = []
        self._task_listeners: list[TaskUpdateListener] = []
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> NotificationState:
        return self._state

    @property
    def notifications(self) -> tuple[ClientNotification, ...]:
        return self._state.notifications

    @property
    def unread_count(self) -> int:
        return self._state.unread_count

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe callback."""

        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def on_task_update(self, listener: TaskUpdateListener) -> Callable[[], None]:
        self._task_listeners.append(listener)
        return lambda: self._task_listeners.remove(listener)

    async def load(self) -> None:
        """Fetch the server list and merge it into the local one."""

        self._dispatch(LoadStarted())
        try:
            notifications = await self._api.list()
        except Exception as exc:
            logger.warning("Failed to load notifications: %s", exc)
            self._dispatch(LoadFailed(str(exc)))
            return
        self._dispatch(NotificationsLoaded(tuple(notifications)))

    def on_push(self, notification: ClientNotification) -> None:
        self._dispatch(NotificationPushed(notification))

    def handle_message(self, message: dict[str, Any]) -> None:
        """Route a raw websocket message to the matching handler."""

        event = message.get("event")
        payload = message.get("payload")
        if event == NOTIFICATION_EVENT and isinstance(payload, dict):
            self.on_push(ClientNotification.from_wire(payload))
        elif event == TASK_UPDATE_EVENT and isinstance(payload, dict):
            for listener in list(self._task_listeners):
                listener(payload.get("taskId"), payload.get("update") or {})
        else:
            logger.debug("Ignoring websocket message %r", event)

    def mark_as_read(self, notification_id: str) -> asyncio.Task[None] | None:
        """Flip ``notification_id`` to read now and confirm with the server.

        Returns the background confirmation task, or ``None`` when the record
        is unknown or already read.
        """

        current = self._state.get(notification_id)
        if current is None or current.read:
            return None
        loop = asyncio.get_running_loop()
        self._dispatch(MarkReadRequested(notification_id))
        return self._spawn(loop, self._confirm_read(notification_id))

    async def mark_all_as_read(self) -> None:
        """Flip every record to read; reload from the server if that fails."""

        self._dispatch(MarkAllReadRequested())
        try:
            await self._api.mark_all_read()
        except Exception as exc:
            logger.warning("Failed to mark all notifications as read: %s", exc)
            await self.load()

    async def wait_pending(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _confirm_read(self, notification_id: str) -> None:
        try:
            await self._api.mark_read(notification_id)
        except Exception as exc:
            logger.warning(
                "Failed to mark notification %s as read: %s", notification_id, exc
            )
            self._dispatch(MarkReadFailed(notification_id))

    def _spawn(
        self, loop: asyncio.AbstractEventLoop, coro: Any
    ) -> asyncio.Task[None]:
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _dispatch(self, event: NotificationEvent) -> None:
        new_state = reduce(self._state, event)
        if new_state is self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)


__all__ = ["NotificationSource", "NotificationStore"]
