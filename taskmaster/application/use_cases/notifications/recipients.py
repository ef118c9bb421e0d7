"""Recipient set computation for notification-worthy events."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class CommentRecipient:
    user_id: str
    mentioned: bool


def resolve_comment_recipients(
    *,
    author_id: str,
    mentioned_ids: Iterable[str],
    assignee_id: str | None,
    creator_id: str | None,
) -> list[CommentRecipient]:
    """Return who hears about a new comment, each user at most once.

    Mentioned users come first, then the task assignee, then the task creator.
    The comment author is never a recipient.
    """

    recipients: list[CommentRecipient] = []
    seen = {author_id}
    for user_id in mentioned_ids:
        if user_id and user_id not in seen:
            seen.add(user_id)
            recipients.append(CommentRecipient(user_id=user_id, mentioned=True))
    for user_id in (assignee_id, creator_id):
        if user_id and user_id not in seen:
            seen.add(user_id)
            recipients.append(CommentRecipient(user_id=user_id, mentioned=False))
    return recipients


__all__ = ["CommentRecipient", "resolve_comment_recipients"]
