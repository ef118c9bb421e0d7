"""Use case for updating tasks."""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from taskmaster.application.use_cases.notifications import (
    EmailScheduler,
    notification_guard,
    notify_task_assigned,
    notify_task_status_changed,
)
from taskmaster.domain.entities import Task, TaskStatus
from taskmaster.infrastructure.notifications import PushDispatcher, serialize_task
from taskmaster.infrastructure.repositories import TaskRepository, UserRepository

UPDATABLE_FIELDS = frozenset(
    {"title", "description", "status", "project_id", "assignee_id"}
)


def update_task(
    session: Session,
    *,
    task_id: str,
    actor_id: str,
    changes: Mapping[str, Any],
    dispatcher: PushDispatcher,
    email_scheduler: EmailScheduler | None = None,
) -> Task:
    """Apply ``changes`` to a task owned by ``actor_id``.

    ``changes`` only carries the fields the caller set; an explicit
    ``assignee_id=None`` unassigns the task.
    """

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unsupported task fields: {', '.join(sorted(unknown))}")

    repository = TaskRepository(session)
    current = repository.get(task_id)
    if current is None:
        raise LookupError(f"Task with ID {task_id} not found")
    if current.created_by_id != actor_id:
        raise PermissionError("You can only update your own tasks")

    values = {
        name: value
        for name, value in changes.items()
        if value is not None or name not in {"title", "status"}
    }
    if "status" in values:
        values["status"] = TaskStatus(values["status"])
    new_assignee = values.get("assignee_id")
    if new_assignee and UserRepository(session).get(new_assignee) is None:
        raise ValueError("Assignee not found")

    updated = repository.update(replace(current, **values))

    if new_assignee and new_assignee != current.assignee_id:
        with notification_guard("task assignment", updated.id):
            notify_task_assigned(
                session,
                task=updated,
                actor_id=actor_id,
                dispatcher=dispatcher,
                email_scheduler=email_scheduler,
            )

    with notification_guard("task status", updated.id):
        notify_task_status_changed(
            session,
            task=updated,
            previous_status=current.status,
            dispatcher=dispatcher,
        )

    with notification_guard("task broadcast", updated.id):
        dispatcher.send_task_update(
            updated.id, {"task": serialize_task(updated), "updatedBy": actor_id}
        )
    return updated
