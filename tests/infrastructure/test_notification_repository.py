"""Tests for the durable notification store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from taskmaster.domain.entities import NotificationKind
from taskmaster.domain.exceptions import PersistenceError
from taskmaster.infrastructure.repositories import NotificationRepository
from taskmaster.infrastructure.repositories import notification_repository


@pytest.fixture()
def ticking_clock(monkeypatch: pytest.MonkeyPatch):
    """Give every created record a distinct, increasing timestamp."""

    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(
        notification_repository,
        "now_utc",
        lambda: start + timedelta(seconds=next(ticks)),
    )


def _create(repository: NotificationRepository, user_id: str, title: str = "Hello"):
    return repository.create(
        user_id,
        NotificationKind.TASK_ASSIGNED,
        title,
        f"{title} message",
        {"taskId": "task-1"},
    )


def test_create_returns_unread_record_with_metadata(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")
    repository = NotificationRepository(db_session)

    record = _create(repository, alice.id)

    assert record.id
    assert record.user_id == alice.id
    assert record.kind is NotificationKind.TASK_ASSIGNED
    assert record.read is False
    assert record.metadata == {"taskId": "task-1"}
    assert record.created_at is not None
    assert record.created_at.tzinfo is not None


def test_list_for_user_is_newest_first_and_capped(
    db_session, make_user, ticking_clock
) -> None:
    alice = make_user("Alice", "Smith")
    bob = make_user("Bob", "Jones")
    repository = NotificationRepository(db_session)

    for index in range(5):
        _create(repository, alice.id, title=f"n{index}")
    _create(repository, bob.id, title="other")

    records = repository.list_for_user(alice.id, limit=3)

    assert [record.title for record in records] == ["n4", "n3", "n2"]
    assert all(record.user_id == alice.id for record in records)


def test_list_for_user_rejects_non_positive_limit(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")

    with pytest.raises(ValueError):
        NotificationRepository(db_session).list_for_user(alice.id, limit=0)


def test_mark_read_is_idempotent(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")
    repository = NotificationRepository(db_session)
    record = _create(repository, alice.id)

    first = repository.mark_read(record.id, alice.id)
    second = repository.mark_read(record.id, alice.id)

    assert first is not None and first.read is True
    assert second is not None and second.read is True
    assert repository.list_unread(alice.id) == []


def test_mark_read_for_another_user_is_not_found(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")
    mallory = make_user("Mallory", "Evil")
    repository = NotificationRepository(db_session)
    record = _create(repository, alice.id)

    assert repository.mark_read(record.id, mallory.id) is None

    stored = repository.get_for_user(record.id, alice.id)
    assert stored is not None
    assert stored.read is False


def test_mark_read_unknown_id_is_not_found(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")

    assert NotificationRepository(db_session).mark_read("missing", alice.id) is None


def test_mark_all_read_only_touches_own_unread_records(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")
    bob = make_user("Bob", "Jones")
    repository = NotificationRepository(db_session)
    already_read = _create(repository, alice.id, title="old")
    repository.mark_read(already_read.id, alice.id)
    _create(repository, alice.id, title="a")
    _create(repository, alice.id, title="b")
    _create(repository, bob.id, title="c")

    assert repository.mark_all_read(alice.id) == 2
    assert repository.mark_all_read(alice.id) == 0
    assert repository.list_unread(alice.id) == []
    assert [record.title for record in repository.list_unread(bob.id)] == ["c"]


def test_delete_is_ownership_checked(db_session, make_user) -> None:
    alice = make_user("Alice", "Smith")
    mallory = make_user("Mallory", "Evil")
    repository = NotificationRepository(db_session)
    record = _create(repository, alice.id)

    assert repository.delete(record.id, mallory.id) is False
    assert repository.get_for_user(record.id, alice.id) is not None

    assert repository.delete(record.id, alice.id) is True
    assert repository.get_for_user(record.id, alice.id) is None
    assert repository.delete(record.id, alice.id) is False


def test_create_failure_raises_persistence_error(
    db_session, make_user, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice = make_user("Alice", "Smith")

    def _fail() -> None:
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", _fail)

    with pytest.raises(PersistenceError):
        _create(NotificationRepository(db_session), alice.id)
