"""Connection management helpers for notification websockets."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol
from uuid import uuid4

import anyio

from taskmaster.domain.exceptions import AuthenticationFailure

logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008
INTERNAL_ERROR = 1011
GOING_AWAY = 1001

CredentialVerifier = Callable[[str], str]


class PushConnection(Protocol):
    """Subset of :class:`fastapi.WebSocket` the registry relies on."""

    async def accept(self) -> None: ...

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000, reason: str | None = None) -> None: ...


class SessionState(str, Enum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


@dataclass(eq=False)
class ConnectionSession:
    """A live transport connection and the identity bound to it."""

    websocket: PushConnection
    connection_id: str = field(default_factory=lambda: uuid4().hex)
    identity: str | None = None
    state: SessionState = SessionState.CONNECTING


class SessionRegistry:
    """Manage active websocket connections grouped by user.

    The registry is owned by the application lifespan. All mutation happens on
    the event loop thread; sends iterate over snapshots so a connection may
    join or leave while a push to its group is in flight.
    """

    def __init__(
        self, verifier: CredentialVerifier, *, auth_timeout: float = 5.0
    ) -> None:
        self._verifier = verifier
        self._auth_timeout = auth_timeout
        self._groups: dict[str, dict[str, ConnectionSession]] = {}
        self._pending: set[asyncio.Task[None]] = set()

    async def connect(
        self, websocket: PushConnection, credential: str | None
    ) -> ConnectionSession | None:
        """Verify ``credential`` and admit ``websocket`` into its identity group.

        Returns ``None`` when the connection was rejected and closed.
        """

        session = ConnectionSession(websocket=websocket)
        if not credential:
            await self._reject(session, "no credential provided")
            return None

        try:
            with anyio.fail_after(self._auth_timeout):
                identity = await anyio.to_thread.run_sync(
                    self._verifier, credential, abandon_on_cancel=True
                )
        except AuthenticationFailure as exc:
            await self._reject(session, str(exc) or "invalid credential")
            return None
        except TimeoutError:
            await self._reject(session, "credential verification timed out")
            return None
        except Exception:
            logger.exception("Credential verification failed unexpectedly")
            await self._reject(session, "verification error", code=INTERNAL_ERROR)
            return None

        await websocket.accept()
        session.identity = identity
        session.state = SessionState.AUTHENTICATED
        self.add_to_group(session)
        logger.info(
            "Websocket %s admitted for user %s", session.connection_id, identity
        )
        return session

    def add_to_group(self, session: ConnectionSession) -> None:
        """Register ``session`` under its identity; adding twice is a no-op."""

        if session.state is not SessionState.AUTHENTICATED or not session.identity:
            raise ValueError("Only authenticated sessions can join a group")
        group = self._groups.setdefault(session.identity, {})
        group[session.connection_id] = session

    def disconnect(self, session: ConnectionSession) -> None:
        """Remove ``session`` from its group."""

        was_open = session.state is not SessionState.CLOSED
        session.state = SessionState.CLOSED
        if session.identity is None:
            return
        group = self._groups.get(session.identity)
        if group is None:
            return
        group.pop(session.connection_id, None)
        if not group:
            self._groups.pop(session.identity, None)
        if was_open:
            logger.info(
                "Websocket %s closed for user %s", session.connection_id, session.identity
            )

    def send_to_user(self, identity: str, message: dict[str, Any]) -> int:
        """Schedule ``message`` for every live connection of ``identity``.

        Returns the number of connections targeted. Zero means the push was a
        miss; nothing is queued for later.
        """

        group = self._groups.get(identity)
        if not group:
            logger.debug("No live connection for user %s; push skipped", identity)
            return 0
        targets = list(group.values())
        for session in targets:
            self._spawn(session, message)
        return len(targets)

    def broadcast(self, message: dict[str, Any]) -> int:
        """Schedule ``message`` for every live connection regardless of identity."""

        targets = [
            session for group in list(self._groups.values()) for session in group.values()
        ]
        for session in targets:
            self._spawn(session, message)
        return len(targets)

    def connection_count(self, identity: str | None = None) -> int:
        if identity is not None:
            return len(self._groups.get(identity, {}))
        return sum(len(group) for group in self._groups.values())

    def identities(self) -> frozenset[str]:
        return frozenset(self._groups)

    async def drain(self) -> None:
        """Wait until every scheduled send has finished."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close_all(self) -> None:
        """Cancel in-flight sends and close every registered connection."""

        for task in list(self._pending):
            task.cancel()
        await self.drain()

        sessions = [
            session for group in list(self._groups.values()) for session in group.values()
        ]
        self._groups.clear()
        for session in sessions:
            session.state = SessionState.CLOSED
            try:
                await session.websocket.close(code=GOING_AWAY)
            except Exception as exc:
                logger.debug(
                    "Ignoring close error on websocket %s: %s", session.connection_id, exc
                )

    def _spawn(self, session: ConnectionSession, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver(session, message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, session: ConnectionSession, message: dict[str, Any]) -> None:
        try:
            await session.websocket.send_json(message)
        except Exception as exc:
            logger.warning(
                "Dropping websocket %s for user %s after failed send: %s",
                session.connection_id,
                session.identity,
                exc,
            )
            self.disconnect(session)

    async def _reject(
        self, session: ConnectionSession, reason: str, *, code: int = POLICY_VIOLATION
    ) -> None:
        session.state = SessionState.CLOSED
        logger.warning(
            "Websocket %s rejected: %s", session.connection_id, reason
        )
        await session.websocket.close(code=code)


__all__ = [
    "ConnectionSession",
    "CredentialVerifier",
    "PushConnection",
    "SessionRegistry",
    "SessionState",
]
