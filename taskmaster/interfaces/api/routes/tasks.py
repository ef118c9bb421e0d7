"""Routes for creating and updating board tasks."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskmaster.application.use_cases.tasks import (
    create_task as create_task_uc,
    update_task as update_task_uc,
)
from taskmaster.domain.entities import Task, User
from taskmaster.infrastructure.database import get_db
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.infrastructure.repositories import TaskRepository
from taskmaster.interfaces.api.dependencies import get_current_user, get_push_dispatcher
from taskmaster.interfaces.api.schemas import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _to_read_model(task: Task) -> TaskRead:
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        project_id=task.project_id,
        assignee_id=task.assignee_id,
        created_by_id=task.created_by_id,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: PushDispatcher = Depends(get_push_dispatcher),
) -> TaskRead:
    """Create a task; the assignee is notified even when it is the creator."""

    try:
        task = create_task_uc(
            db,
            title=payload.title,
            created_by=current_user.id,
            dispatcher=dispatcher,
            description=payload.description,
            status=payload.status,
            project_id=payload.project_id,
            assignee_id=payload.assignee_id,
            email_scheduler=background_tasks.add_task,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(task)


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    task = TaskRepository(db).get(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return _to_read_model(task)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: PushDispatcher = Depends(get_push_dispatcher),
) -> TaskRead:
    """Update a task owned by the caller and broadcast the change to the board."""

    try:
        task = update_task_uc(
            db,
            task_id=task_id,
            actor_id=current_user.id,
            changes=payload.model_dump(exclude_unset=True),
            dispatcher=dispatcher,
            email_scheduler=background_tasks.add_task,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(task)
