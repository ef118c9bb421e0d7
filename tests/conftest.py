"""Shared fixtures for the test suite.

The database URL and signing key must be in the environment before the
``taskmaster`` settings are first read, so they are set at import time.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="taskmaster-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from taskmaster.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from taskmaster.domain.entities import Notification, User  # noqa: E402
from taskmaster.infrastructure import database  # noqa: E402
from taskmaster.infrastructure.repositories import UserRepository  # noqa: E402
from taskmaster.infrastructure.security import create_access_token  # noqa: E402


class RecordingDispatcher:
    """Stand-in for the push dispatcher that remembers every call."""

    def __init__(self) -> None:
        self.pushes: list[tuple[str, Notification]] = []
        self.task_updates: list[tuple[str, dict[str, Any]]] = []

    def send_to_user(self, user_id: str, notification: Notification) -> None:
        self.pushes.append((user_id, notification))

    def send_task_update(self, task_id: str, update: dict[str, Any]) -> None:
        self.task_updates.append((task_id, update))


@pytest.fixture(autouse=True)
def clean_database() -> Iterator[None]:
    """Recreate every table so each test starts from an empty database."""

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session):
    """Factory creating active users in the directory."""

    def _make_user(first_name: str, last_name: str, email: str | None = None) -> User:
        address = email or f"{first_name}.{last_name}@example.com".lower()
        return UserRepository(db_session).create(
            User(id=None, email=address, first_name=first_name, last_name=last_name)
        )

    return _make_user


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def client():
    """Return a test client bound to an application with its lifespan running."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
