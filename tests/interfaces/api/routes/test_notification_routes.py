"""Integration tests for the notification HTTP and websocket endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from taskmaster.domain.entities import NotificationKind
from taskmaster.infrastructure.repositories import NotificationRepository


@pytest.fixture()
def users(make_user):
    return make_user("Ana", "Lopez"), make_user("Bruno", "Diaz")


def _seed(db_session, user_id: str, count: int = 1):
    repository = NotificationRepository(db_session)
    return [
        repository.create(
            user_id,
            NotificationKind.TASK_UPDATED,
            f"Update {index}",
            "Something changed",
            {"taskId": f"t-{index}"},
        )
        for index in range(count)
    ]


def test_notification_endpoints_require_authentication(client: TestClient) -> None:
    response = client.get("/notifications")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_token_is_rejected(client: TestClient) -> None:
    response = client.get(
        "/notifications", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


def test_list_returns_only_own_records_in_wire_shape(
    client: TestClient, db_session, users, auth_headers
) -> None:
    ana, bruno = users
    [record] = _seed(db_session, ana.id)
    _seed(db_session, bruno.id, count=2)

    response = client.get("/notifications", headers=auth_headers(ana))

    assert response.status_code == 200
    [body] = response.json()
    assert body["id"] == record.id
    assert body["userId"] == ana.id
    assert body["type"] == "task_updated"
    assert body["read"] is False
    assert body["metadata"] == {"taskId": "t-0"}
    assert "createdAt" in body


def test_mark_read_is_idempotent_and_ownership_checked(
    client: TestClient, db_session, users, auth_headers
) -> None:
    ana, bruno = users
    [record] = _seed(db_session, ana.id)

    foreign = client.patch(f"/notifications/{record.id}/read", headers=auth_headers(bruno))
    assert foreign.status_code == 404

    for _ in range(2):
        response = client.patch(
            f"/notifications/{record.id}/read", headers=auth_headers(ana)
        )
        assert response.status_code == 200
        assert response.json()["read"] is True

    unread = client.get("/notifications/unread", headers=auth_headers(ana))
    assert unread.json() == []


def test_mark_all_read_reports_updated_count(
    client: TestClient, db_session, users, auth_headers
) -> None:
    ana, bruno = users
    _seed(db_session, ana.id, count=3)
    _seed(db_session, bruno.id)

    first = client.patch("/notifications/read-all", headers=auth_headers(ana))
    second = client.patch("/notifications/read-all", headers=auth_headers(ana))

    assert first.json() == {"updated": 3}
    assert second.json() == {"updated": 0}
    assert len(client.get("/notifications/unread", headers=auth_headers(bruno)).json()) == 1


def test_delete_notification(client: TestClient, db_session, users, auth_headers) -> None:
    ana, bruno = users
    [record] = _seed(db_session, ana.id)

    assert client.delete(f"/notifications/{record.id}", headers=auth_headers(bruno)).status_code == 404
    assert client.delete(f"/notifications/{record.id}", headers=auth_headers(ana)).status_code == 204
    assert client.delete(f"/notifications/{record.id}", headers=auth_headers(ana)).status_code == 404


def test_websocket_without_credential_is_closed(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws"):
            pass

    assert excinfo.value.code == 1008


def test_websocket_with_bad_credential_is_closed(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws?token=forged"):
            pass

    assert excinfo.value.code == 1008


def test_websocket_answers_ping(client: TestClient, users, auth_headers) -> None:
    ana, _ = users

    with client.websocket_connect("/notifications/ws", headers=auth_headers(ana)) as ws:
        ws.send_json({"event": "ping"})
        assert ws.receive_json() == {"event": "pong"}


def test_assignment_is_pushed_to_connected_assignee(
    client: TestClient, users, auth_headers
) -> None:
    ana, bruno = users
    token = auth_headers(bruno)["Authorization"].removeprefix("Bearer ")

    with client.websocket_connect(f"/notifications/ws?token={token}") as ws:
        ws.send_json({"event": "ping"})
        assert ws.receive_json() == {"event": "pong"}

        response = client.post(
            "/tasks",
            json={"title": "Review PR", "assigneeId": bruno.id},
            headers=auth_headers(ana),
        )
        assert response.status_code == 201

        message = ws.receive_json()

    assert message["event"] == "notification"
    payload = message["payload"]
    assert payload["userId"] == bruno.id
    assert payload["type"] == "task_assigned"
    assert payload["title"] == "New Task Assigned"
    assert payload["metadata"] == {"taskId": response.json()["id"]}

    listed = client.get("/notifications", headers=auth_headers(bruno)).json()
    assert [item["id"] for item in listed] == [payload["id"]]
