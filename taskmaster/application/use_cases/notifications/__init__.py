"""Public helpers for emitting domain notifications."""

from .events import (
    EmailScheduler,
    notification_guard,
    notify_comment_created,
    notify_project_invited,
    notify_task_assigned,
    notify_task_status_changed,
)
from .mentions import MentionResolution, MentionResolver
from .recipients import CommentRecipient, resolve_comment_recipients

__all__ = [
    "EmailScheduler",
    "notification_guard",
    "notify_comment_created",
    "notify_project_invited",
    "notify_task_assigned",
    "notify_task_status_changed",
    "MentionResolution",
    "MentionResolver",
    "CommentRecipient",
    "resolve_comment_recipients",
]
