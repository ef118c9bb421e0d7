"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from anyio import from_thread

from taskmaster.domain.entities import Notification, NotificationKind, Task, TaskStatus
from taskmaster.utils import isoformat_or_none

from .manager import SessionRegistry

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"
TASK_UPDATE_EVENT = "task:update"


class PushDispatcher:
    """Serialize records and hand them to the session registry.

    Delivery is at-most-once and fire-and-forget: nothing is retried and a
    recipient without a live connection simply misses the push.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry

    def send_to_user(self, user_id: str, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to ``user_id``."""

        message = {
            "event": NOTIFICATION_EVENT,
            "payload": serialize_notification(notification),
        }
        self._schedule(self._registry.send_to_user, user_id, message)

    def send_task_update(self, task_id: str, update: dict[str, Any]) -> None:
        """Broadcast a board refresh for ``task_id`` to every connection."""

        message = {
            "event": TASK_UPDATE_EVENT,
            "payload": {"taskId": task_id, "update": update},
        }
        self._schedule(self._registry.broadcast, message)

    def _schedule(self, func: Callable[..., int], *args: Any) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Sync FastAPI routes run in AnyIO worker threads.
            try:
                from_thread.run_sync(func, *args)
            except RuntimeError:
                logger.warning(
                    "No event loop reachable from this thread; realtime push dropped"
                )
        else:
            func(*args)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the wire representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "type": NotificationKind(notification.kind).value,
        "title": notification.title,
        "message": notification.message,
        "read": bool(notification.read),
        "metadata": notification.metadata,
        "createdAt": isoformat_or_none(notification.created_at),
    }


def serialize_task(task: Task) -> dict[str, Any]:
    """Return the JSON representation of ``task`` used in board broadcasts."""

    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": TaskStatus(task.status).value,
        "projectId": task.project_id,
        "assigneeId": task.assignee_id,
        "createdById": task.created_by_id,
        "createdAt": isoformat_or_none(task.created_at),
        "updatedAt": isoformat_or_none(task.updated_at),
    }


__all__ = [
    "NOTIFICATION_EVENT",
    "TASK_UPDATE_EVENT",
    "PushDispatcher",
    "serialize_notification",
    "serialize_task",
]
