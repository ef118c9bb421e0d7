"""Domain entities exposed by the application."""

from .comment import Comment
from .notification import Notification, NotificationKind
from .task import Task, TaskStatus
from .user import User

__all__ = [
    "Comment",
    "Notification",
    "NotificationKind",
    "Task",
    "TaskStatus",
    "User",
]
