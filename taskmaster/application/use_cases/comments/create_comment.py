"""Use case for posting comments on tasks."""

import logging

from sqlalchemy.orm import Session

from taskmaster.application.use_cases.notifications import (
    MentionResolver,
    notification_guard,
    notify_comment_created,
)
from taskmaster.domain.entities import Comment
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.infrastructure.repositories import (
    CommentRepository,
    TaskRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


def create_comment(
    session: Session,
    *,
    task_id: str,
    author_id: str,
    content: str,
    dispatcher: PushDispatcher,
) -> Comment:
    """Store a comment, record who it mentions and notify interested users."""

    if TaskRepository(session).get(task_id) is None:
        raise LookupError(f"Task with ID {task_id} not found")

    resolution = MentionResolver(UserRepository(session).list_active()).resolve(content)
    if resolution.ambiguous:
        logger.info(
            "Ignoring ambiguous mentions on task %s: %s",
            task_id,
            ", ".join(resolution.ambiguous),
        )

    comment = CommentRepository(session).create(
        Comment(
            id=None,
            task_id=task_id,
            user_id=author_id,
            content=content,
            mentions=list(resolution.user_ids),
        )
    )

    with notification_guard("comment", comment.id):
        notify_comment_created(session, comment=comment, dispatcher=dispatcher)
    return comment
