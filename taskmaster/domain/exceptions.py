"""Errors raised by the notification pipeline."""


class NotificationError(Exception):
    """Base class for notification pipeline failures."""


class PersistenceError(NotificationError):
    """The record store is unavailable or rejected a write."""


class AuthenticationFailure(NotificationError):
    """A bearer credential was missing, invalid, expired or names no active user."""


__all__ = ["NotificationError", "PersistenceError", "AuthenticationFailure"]
