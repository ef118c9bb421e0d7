from .comment import CommentCreate, CommentRead
from .notification import MarkAllReadResponse, NotificationRead
from .task import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "CommentCreate",
    "CommentRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
