"""Security helpers for bearer token generation and validation."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from taskmaster.config import get_settings
from taskmaster.domain.exceptions import AuthenticationFailure

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the claims of ``token`` or raise :class:`AuthenticationFailure`.

    Expired tokens fail here because ``jose`` validates the ``exp`` claim.
    """

    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationFailure("Could not validate credentials") from exc


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""

    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
