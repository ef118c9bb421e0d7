"""Repository implementations for infrastructure layer."""

from .comment_repository import CommentRepository
from .notification_repository import DEFAULT_LIST_LIMIT, NotificationRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "CommentRepository",
    "DEFAULT_LIST_LIMIT",
    "NotificationRepository",
    "TaskRepository",
    "UserRepository",
]
