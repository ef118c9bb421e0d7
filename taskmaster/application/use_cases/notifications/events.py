"""Utility helpers to generate and dispatch domain notifications.

Every helper persists the record first and only then hands it to the push
dispatcher, so the stored record is always the durable fallback for a missed
push. Callers wrap these helpers in :func:`notification_guard`: a notification
failure is logged and never undoes the domain write that triggered it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.orm import Session

from taskmaster.config import get_settings
from taskmaster.domain.entities import (
    Comment,
    Notification,
    NotificationKind,
    Task,
    TaskStatus,
)
from taskmaster.domain.exceptions import PersistenceError
from taskmaster.infrastructure.email import send_task_assignment_email
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.infrastructure.repositories import (
    NotificationRepository,
    TaskRepository,
    UserRepository,
)

from .recipients import resolve_comment_recipients

logger = logging.getLogger(__name__)

# ``BackgroundTasks.add_task`` compatible: ``scheduler(func, *args)``.
EmailScheduler = Callable[..., Any]


@contextmanager
def notification_guard(event: str, subject_id: str | None) -> Iterator[None]:
    """Log and swallow any failure raised while notifying about ``event``."""

    try:
        yield
    except PersistenceError as exc:
        logger.warning(
            "Notification for %s on %s was not stored: %s", event, subject_id, exc
        )
    except Exception:
        logger.exception("Error sending %s notification for %s", event, subject_id)


def _persist_notification(
    session: Session,
    dispatcher: PushDispatcher,
    *,
    user_id: str,
    kind: NotificationKind,
    title: str,
    message: str,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    saved = NotificationRepository(session).create(
        user_id, kind, title, message, metadata
    )
    dispatcher.send_to_user(user_id, saved)
    return saved


def notify_task_assigned(
    session: Session,
    *,
    task: Task,
    actor_id: str,
    dispatcher: PushDispatcher,
    created: bool = False,
    email_scheduler: EmailScheduler | None = None,
) -> Notification | None:
    """Notify the assignee of ``task``, including when they assigned themselves."""

    if not task.assignee_id:
        return None

    if task.assignee_id != actor_id:
        title = "New Task Assigned"
    elif created:
        title = "Task Created and Assigned to You"
    else:
        title = "Task Assigned to You"

    notification = _persist_notification(
        session,
        dispatcher,
        user_id=task.assignee_id,
        kind=NotificationKind.TASK_ASSIGNED,
        title=title,
        message=f"You have been assigned to task: {task.title}",
        metadata={"taskId": task.id},
    )

    if email_scheduler is not None:
        with notification_guard("assignment email", task.id):
            _schedule_assignment_email(
                session, task=task, actor_id=actor_id, email_scheduler=email_scheduler
            )
    return notification


def _schedule_assignment_email(
    session: Session, *, task: Task, actor_id: str, email_scheduler: EmailScheduler
) -> None:
    users = UserRepository(session)
    assignee = users.get(task.assignee_id) if task.assignee_id else None
    assigner = users.get(actor_id)
    if assignee is None or assigner is None:
        return

    task_url = f"{get_settings().frontend_url.rstrip('/')}/tasks/{task.id}"
    email_scheduler(
        send_task_assignment_email,
        assignee.email,
        task.title,
        task.description,
        assigner.full_name,
        task_url,
    )


def notify_task_status_changed(
    session: Session,
    *,
    task: Task,
    previous_status: TaskStatus | str,
    dispatcher: PushDispatcher,
) -> Notification | None:
    """Tell the assignee that the task moved to a different column."""

    status = TaskStatus(task.status)
    if not task.assignee_id or status == TaskStatus(previous_status):
        return None

    return _persist_notification(
        session,
        dispatcher,
        user_id=task.assignee_id,
        kind=NotificationKind.TASK_UPDATED,
        title="Task Status Updated",
        message=f'Task "{task.title}" status changed to {status.value}',
        metadata={"taskId": task.id, "status": status.value},
    )


def notify_comment_created(
    session: Session,
    *,
    comment: Comment,
    dispatcher: PushDispatcher,
) -> list[Notification]:
    """Notify mentioned users, the assignee and the creator about ``comment``.

    Each recipient is notified independently; a failure for one of them is
    logged and does not stop the others.
    """

    task = TaskRepository(session).get(comment.task_id)
    if task is None:
        msg = f"Task {comment.task_id} not found for comment {comment.id}"
        raise LookupError(msg)

    recipients = resolve_comment_recipients(
        author_id=comment.user_id,
        mentioned_ids=comment.mentions,
        assignee_id=task.assignee_id,
        creator_id=task.created_by_id,
    )

    metadata = {"taskId": task.id, "commentId": comment.id}
    created: list[Notification] = []
    for recipient in recipients:
        if recipient.mentioned:
            title = "You were mentioned in a comment"
            message = f"You were mentioned in a comment on task: {task.title}"
        else:
            title = "New Comment on Task"
            message = f"A new comment was added to task: {task.title}"
        with notification_guard("comment", comment.id):
            created.append(
                _persist_notification(
                    session,
                    dispatcher,
                    user_id=recipient.user_id,
                    kind=NotificationKind.TASK_COMMENTED,
                    title=title,
                    message=message,
                    metadata=metadata,
                )
            )
    return created


def notify_project_invited(
    session: Session,
    *,
    project_id: str,
    project_name: str,
    invitee_id: str,
    inviter_id: str,
    dispatcher: PushDispatcher,
) -> Notification | None:
    """Tell ``invitee_id`` they joined a project; inviting yourself is silent."""

    if not invitee_id or invitee_id == inviter_id:
        return None

    return _persist_notification(
        session,
        dispatcher,
        user_id=invitee_id,
        kind=NotificationKind.PROJECT_INVITED,
        title="Project Invitation",
        message=f"You were invited to project: {project_name}",
        metadata={"projectId": project_id},
    )


__all__ = [
    "EmailScheduler",
    "notification_guard",
    "notify_task_assigned",
    "notify_task_status_changed",
    "notify_comment_created",
    "notify_project_invited",
]
