from __future__ import annotations

from typing import Optional

from psycopg_pool import AsyncConnectionPool

from signup.domain.entities import ClientConfig
from signup.domain.ports.client_registry import ClientRegistryPort


class PgClientRegistry(ClientRegistryPort):
    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def lookup(self, client_id: str, zone_id: str) -> Optional[ClientConfig]:
        sql = """
        SELECT client_id, zone_id, additional_information
        FROM oauth_clients
        WHERE client_id = %s AND zone_id = %s
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (client_id, zone_id))
                row = await cur.fetchone()
        if not row:
            return None
        cid, zid, additional_information = row
        return ClientConfig(
            client_id=str(cid),
            zone_id=str(zid),
            additional_information=dict(additional_information or {}),
        )
