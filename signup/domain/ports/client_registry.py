from __future__ import annotations

from typing import Optional, Protocol

from signup.domain.entities import ClientConfig


class ClientRegistryPort(Protocol):
    async def lookup(self, client_id: str, zone_id: str) -> Optional[ClientConfig]:
        """Return the client's registration in the zone, or None."""
