"""Use case for creating tasks."""

from sqlalchemy.orm import Session

from taskmaster.application.use_cases.notifications import (
    EmailScheduler,
    notification_guard,
    notify_task_assigned,
)
from taskmaster.domain.entities import Task, TaskStatus
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.infrastructure.repositories import TaskRepository, UserRepository


def create_task(
    session: Session,
    *,
    title: str,
    created_by: str,
    dispatcher: PushDispatcher,
    description: str | None = None,
    status: TaskStatus = TaskStatus.TODO,
    project_id: str | None = None,
    assignee_id: str | None = None,
    email_scheduler: EmailScheduler | None = None,
) -> Task:
    """Create a task and notify its assignee, if any."""

    if assignee_id and UserRepository(session).get(assignee_id) is None:
        raise ValueError("Assignee not found")

    task = TaskRepository(session).create(
        Task(
            id=None,
            title=title,
            created_by_id=created_by,
            description=description,
            status=TaskStatus(status),
            project_id=project_id,
            assignee_id=assignee_id,
        )
    )

    with notification_guard("task assignment", task.id):
        notify_task_assigned(
            session,
            task=task,
            actor_id=created_by,
            dispatcher=dispatcher,
            created=True,
            email_scheduler=email_scheduler,
        )
    return task
