"""SQLAlchemy model for task comments."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text

from taskmaster.infrastructure.database import Base
from taskmaster.utils import now_utc_naive


class CommentModel(Base):
    """Database representation of a comment."""

    __tablename__ = "comment"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    task_id = Column(
        String(36), ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False)
    content = Column(Text, nullable=False)
    mentions = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)


__all__ = ["CommentModel"]
