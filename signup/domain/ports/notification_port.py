from __future__ import annotations

from typing import Protocol

from signup.domain.entities import MessageKind


class NotificationPort(Protocol):
    async def send(
        self,
        *,
        to: str,
        kind: MessageKind,
        subject: str,
        body: str,
    ) -> None:
        """Send a rendered message. Raises on delivery failure."""
