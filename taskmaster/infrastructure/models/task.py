"""SQLAlchemy model for board tasks."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from taskmaster.infrastructure.database import Base
from taskmaster.utils import now_utc_naive


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="todo")
    project_id = Column(String(36), nullable=True, index=True)
    assignee_id = Column(String(36), ForeignKey("user.id"), nullable=True, index=True)
    created_by_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)


__all__ = ["TaskModel"]
