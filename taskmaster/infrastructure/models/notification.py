"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from taskmaster.infrastructure.database import Base
from taskmaster.utils import now_utc_naive


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_user_created", "user_id", "created_at"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(32), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)

    user = relationship("UserModel", lazy="select")


__all__ = ["NotificationModel"]
