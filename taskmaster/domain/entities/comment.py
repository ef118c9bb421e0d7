"""Domain entity representing a comment posted on a task."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Comment:
    """Free text attached to a task, with the user ids it mentions."""

    id: str | None
    task_id: str
    user_id: str
    content: str
    mentions: list[str] = field(default_factory=list)
    created_at: datetime | None = None


__all__ = ["Comment"]
