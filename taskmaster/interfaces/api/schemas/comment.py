"""Pydantic models for comment payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommentCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    task_id: str
    content: str = Field(..., min_length=1)


class CommentRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    task_id: str
    user_id: str
    content: str
    mentions: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


__all__ = ["CommentCreate", "CommentRead"]
