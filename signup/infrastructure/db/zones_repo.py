from __future__ import annotations

from typing import Optional

from psycopg_pool import AsyncConnectionPool

from signup.domain.entities import TenantContext
from signup.domain.ports.zone_registry import ZoneRegistryPort


class PgZoneRegistry(ZoneRegistryPort):
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def get_by_subdomain(self, subdomain: str) -> Optional[TenantContext]:
        sql = """
        SELECT id, name, subdomain
        FROM identity_zones
        WHERE subdomain = LOWER(%s)
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (subdomain,))
                row = await cur.fetchone()
        if not row:
            return None
        zone_id, name, sub = row
        return TenantContext(zone_id=str(zone_id), name=str(name), subdomain=str(sub))
