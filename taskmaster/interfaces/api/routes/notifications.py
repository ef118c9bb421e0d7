"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from taskmaster.config import get_settings
from taskmaster.domain.entities import Notification, User
from taskmaster.infrastructure.database import get_db
from taskmaster.infrastructure.notifications import SessionRegistry
from taskmaster.infrastructure.repositories import NotificationRepository
from taskmaster.infrastructure.security import extract_bearer_token
from taskmaster.interfaces.api.dependencies import get_current_user
from taskmaster.interfaces.api.schemas import MarkAllReadResponse, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.kind,
        title=notification.title,
        message=notification.message,
        read=notification.read,
        metadata=notification.metadata,
        created_at=notification.created_at,
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
    )


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id, limit=get_settings().notification_list_limit
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread", response_model=list[NotificationRead])
def list_unread_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    notifications = NotificationRepository(db).list_unread(current_user.id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.patch("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of the authenticated user as read."""

    updated = NotificationRepository(db).mark_all_read(current_user.id)
    return MarkAllReadResponse(updated=updated)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification as read; someone else's record is reported as missing."""

    notification = NotificationRepository(db).mark_read(notification_id, current_user.id)
    if notification is None:
        raise _not_found()
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    if not NotificationRepository(db).delete(notification_id, current_user.id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    The credential comes from the ``token`` query parameter or an
    ``Authorization: Bearer`` header. Unauthenticated connections are closed
    during the handshake.
    """

    registry: SessionRegistry = websocket.app.state.session_registry
    credential = websocket.query_params.get("token") or extract_bearer_token(
        websocket.headers.get("authorization")
    )
    session = await registry.connect(websocket, credential)
    if session is None:
        return

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except (ValueError, KeyError):
                continue

            if isinstance(message, dict) and message.get("event") == "ping":
                await websocket.send_json({"event": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        registry.disconnect(session)
