from __future__ import annotations

from typing import Optional, Protocol

from signup.domain.entities import TenantContext


class ZoneRegistryPort(Protocol):
    async def get_by_subdomain(self, subdomain: str) -> Optional[TenantContext]:
        """Resolve a non-default identity zone from its hostname prefix."""
