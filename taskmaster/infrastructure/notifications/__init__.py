"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    ConnectionSession,
    CredentialVerifier,
    PushConnection,
    SessionRegistry,
    SessionState,
)
from .publisher import (
    NOTIFICATION_EVENT,
    TASK_UPDATE_EVENT,
    PushDispatcher,
    serialize_notification,
    serialize_task,
)

__all__ = [
    "ConnectionSession",
    "CredentialVerifier",
    "PushConnection",
    "SessionRegistry",
    "SessionState",
    "NOTIFICATION_EVENT",
    "TASK_UPDATE_EVENT",
    "PushDispatcher",
    "serialize_notification",
    "serialize_task",
]
