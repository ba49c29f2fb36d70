from __future__ import annotations

from typing import Dict, Optional

import httpx

from signup.domain.entities import MessageKind
from signup.domain.ports.notification_port import NotificationPort


class HttpNotificationAdapter(NotificationPort):
    """Posts rendered messages to an HTTP mail relay (JSON: to, kind, subject, body)."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(
        self,
        *,
        to: str,
        kind: MessageKind,
        subject: str,
        body: str,
    ) -> None:
        headers: Dict[str, str] = {"X-Message-Kind": kind.value}
        url = f"{self._base_url}{self._send_path}"
        payload = {"to": to, "kind": kind.value, "subject": subject, "body": body}

        try:
            resp = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise RuntimeError(f"mail relay HTTP error: {e}") from e
        if not (200 <= resp.status_code < 300):
            text = resp.text[:200]
            raise RuntimeError(f"mail relay responded {resp.status_code}: {text}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
