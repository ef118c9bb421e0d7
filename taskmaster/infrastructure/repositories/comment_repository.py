"""Persistence layer for task comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskmaster.domain.entities import Comment
from taskmaster.infrastructure.models import CommentModel
from taskmaster.utils import ensure_utc


class CommentRepository:
    """Provide create and lookup operations for :class:`Comment` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            task_id=comment.task_id,
            user_id=comment.user_id,
            content=comment.content,
            mentions=list(comment.mentions) or None,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, comment_id: str) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            content=model.content,
            mentions=list(model.mentions or []),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["CommentRepository"]
