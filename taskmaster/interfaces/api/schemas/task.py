"""Pydantic models for task payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskmaster.domain.entities import TaskStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    project_id: str | None = None
    assignee_id: str | None = None


class TaskUpdate(_CamelModel):
    """Partial update; only the fields present in the request are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    project_id: str | None = None
    assignee_id: str | None = None


class TaskRead(_CamelModel):
    id: str
    title: str
    description: str | None = None
    status: TaskStatus
    project_id: str | None = None
    assignee_id: str | None = None
    created_by_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
