"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Closed set of notification categories understood by the client."""

    TASK_ASSIGNED = "task_assigned"
    TASK_UPDATED = "task_updated"
    TASK_COMMENTED = "task_commented"
    PROJECT_INVITED = "project_invited"


@dataclass
class Notification:
    """Information message delivered to a specific user.

    ``read`` is the only field that changes after creation and it only ever
    moves from ``False`` to ``True`` on the server.
    """

    id: str | None
    user_id: str
    kind: NotificationKind
    title: str
    message: str
    read: bool = False
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationKind"]
