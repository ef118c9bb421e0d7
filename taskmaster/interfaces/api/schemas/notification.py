"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskmaster.domain.entities import NotificationKind


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client.

    Serialized with camelCase keys, the same shape the websocket pushes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    type: NotificationKind
    title: str
    message: str
    read: bool
    metadata: dict[str, Any] | None = None
    created_at: datetime


class MarkAllReadResponse(BaseModel):
    updated: int


__all__ = ["MarkAllReadResponse", "NotificationRead"]
