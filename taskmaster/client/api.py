"""HTTP client for the notification endpoints."""

from __future__ import annotations

import httpx

from .state import ClientNotification


class NotificationsApi:
    """Thin async wrapper around the ``/notifications`` REST resource.

    Non-2xx responses raise :class:`httpx.HTTPStatusError`.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def list(self) -> list[ClientNotification]:
        response = await self._client.get("/notifications")
        response.raise_for_status()
        return [ClientNotification.from_wire(item) for item in response.json()]

    async def mark_read(self, notification_id: str) -> ClientNotification:
        response = await self._client.patch(f"/notifications/{notification_id}/read")
        response.raise_for_status()
        return ClientNotification.from_wire(response.json())

    async def mark_all_read(self) -> int:
        response = await self._client.patch("/notifications/read-all")
        response.raise_for_status()
        return int(response.json().get("updated", 0))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NotificationsApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["NotificationsApi"]
