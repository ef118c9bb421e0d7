"""Routes for posting comments on tasks."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskmaster.application.use_cases.comments import create_comment as create_comment_uc
from taskmaster.domain.entities import User
from taskmaster.infrastructure.database import get_db
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.interfaces.api.dependencies import get_current_user, get_push_dispatcher
from taskmaster.interfaces.api.schemas import CommentCreate, CommentRead

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: PushDispatcher = Depends(get_push_dispatcher),
) -> CommentRead:
    """Post a comment; mentioned users, the assignee and the creator are notified."""

    try:
        comment = create_comment_uc(
            db,
            task_id=payload.task_id,
            author_id=current_user.id,
            content=payload.content,
            dispatcher=dispatcher,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CommentRead(
        id=comment.id,
        task_id=comment.task_id,
        user_id=comment.user_id,
        content=comment.content,
        mentions=comment.mentions,
        created_at=comment.created_at,
    )
