"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def now_utc_naive() -> datetime:
    """Return the current UTC time without attaching ``tzinfo``.

    Used as the column default; SQLite drops offsets on ``DATETIME`` columns so
    the database layer stores naive UTC and the repositories re-attach it.
    """

    return now_utc().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_naive(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC but without ``tzinfo``."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def isoformat_or_none(value: datetime | None) -> str | None:
    """Return the ISO-8601 representation of ``value`` in UTC."""

    normalized = ensure_utc(value)
    return normalized.isoformat() if normalized else None
