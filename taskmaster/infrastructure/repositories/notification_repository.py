"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskmaster.domain.entities import Notification, NotificationKind
from taskmaster.domain.exceptions import PersistenceError
from taskmaster.infrastructure.models import NotificationModel
from taskmaster.utils import ensure_utc, ensure_utc_naive, now_utc

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class NotificationRepository:
    """Durable store for :class:`Notification` records.

    Every lookup that takes a ``user_id`` is ownership checked: a record that
    belongs to someone else behaves exactly like a missing record.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        user_id: str,
        kind: NotificationKind,
        title: str,
        message: str,
        metadata: dict[str, Any] | None = None,
    ) -> Notification:
        model = NotificationModel(
            user_id=user_id,
            type=NotificationKind(kind).value,
            title=title,
            message=message,
            read=False,
            metadata_=dict(metadata) if metadata else None,
            created_at=ensure_utc_naive(now_utc()),
        )
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                f"Could not persist notification for user {user_id}"
            ) from exc
        return self._to_entity(model)

    def list_for_user(
        self, user_id: str, *, limit: int = DEFAULT_LIST_LIMIT
    ) -> Sequence[Notification]:
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_unread(self, user_id: str) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get_for_user(self, notification_id: str, user_id: str) -> Notification | None:
        model = self._get_owned_model(notification_id, user_id)
        return self._to_entity(model) if model else None

    def mark_read(self, notification_id: str, user_id: str) -> Notification | None:
        model = self._get_owned_model(notification_id, user_id)
        if model is None:
            return None
        if not model.read:
            model.read = True
            self._commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read(self, user_id: str) -> int:
        result = self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .where(NotificationModel.read.is_(False))
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        self._commit()
        return result.rowcount or 0

    def delete(self, notification_id: str, user_id: str) -> bool:
        model = self._get_owned_model(notification_id, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self._commit()
        return True

    def _get_owned_model(
        self, notification_id: str, user_id: str
    ) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .one_or_none()
        )

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError("Could not update notifications") from exc

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            kind=NotificationKind(model.type),
            title=model.title,
            message=model.message,
            read=bool(model.read),
            metadata=model.metadata_,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationRepository", "DEFAULT_LIST_LIMIT"]
