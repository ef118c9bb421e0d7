"""Domain entity representing a Kanban task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    """Board columns a task moves through."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    DONE = "done"


@dataclass
class Task:
    """Unit of work owned by its creator and optionally assigned to a user."""

    id: str | None
    title: str
    created_by_id: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    project_id: str | None = None
    assignee_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Task", "TaskStatus"]
