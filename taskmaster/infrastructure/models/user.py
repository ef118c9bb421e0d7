"""SQLAlchemy model for the user table."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import expression

from taskmaster.infrastructure.database import Base
from taskmaster.utils import now_utc_naive


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(120), nullable=False, unique=True, index=True)
    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
