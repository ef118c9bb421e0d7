"""Persistence layer for tasks."""

from __future__ import annotations

from sqlalchemy.orm import Session

from taskmaster.domain.entities import Task, TaskStatus
from taskmaster.infrastructure.models import TaskModel
from taskmaster.utils import ensure_utc


class TaskRepository:
    """Provide CRUD operations for :class:`Task` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: str) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def create(self, task: Task) -> Task:
        model = TaskModel()
        self._apply_entity_to_model(model, task)
        model.created_by_id = task.created_by_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id) if task.id else None
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.description = task.description
        model.status = TaskStatus(task.status).value
        model.project_id = task.project_id
        model.assignee_id = task.assignee_id

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            created_by_id=model.created_by_id,
            description=model.description,
            status=TaskStatus(model.status),
            project_id=model.project_id,
            assignee_id=model.assignee_id,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["TaskRepository"]
