from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from signup.domain.entities import ActivationCode


class CodeStorePort(Protocol):
    async def generate(
        self, payload: dict[str, Any], expires_at: datetime
    ) -> ActivationCode:
        """Persist a fresh single-use code; it is retrievable as soon as this returns."""

    async def redeem(self, code: str) -> Optional[dict[str, Any]]:
        """
        Atomically read and consume a code.
        Return its payload, or None when it is unknown, expired or already used.
        Of several concurrent callers for the same code at most one gets the payload.
        """

    async def peek(self, code: str) -> Optional[dict[str, Any]]:
        """Return the payload of a still-valid code without consuming it."""
