"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskmaster.domain.entities import User
from taskmaster.domain.exceptions import AuthenticationFailure
from taskmaster.infrastructure.database import SessionLocal, get_db
from taskmaster.infrastructure.notifications import PushDispatcher
from taskmaster.infrastructure.repositories import UserRepository
from taskmaster.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the active user named by ``token``.

    Raises :class:`AuthenticationFailure` for any credential problem.
    """

    claims = decode_access_token(token)
    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationFailure("Token has no subject")

    user = UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationFailure("User not found")
    if not user.is_active:
        raise AuthenticationFailure("User is inactive")
    return user


def verify_credential(token: str) -> str:
    """Return the user id for ``token``; used by the websocket handshake."""

    with SessionLocal() as session:
        return resolve_current_user(token, session).id


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the bearer token."""

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return resolve_current_user(credentials.credentials, db)
    except AuthenticationFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_push_dispatcher(request: Request) -> PushDispatcher:
    """Return the dispatcher created by the application lifespan."""

    return request.app.state.push_dispatcher
