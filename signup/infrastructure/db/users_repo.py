from __future__ import annotations

import asyncio
import uuid
from typing import Any, Callable, Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from signup.domain.entities import (
    Conflict,
    Created,
    CreateUserResult,
    NewUser,
    PendingUser,
)
from signup.domain.ports.user_directory import UserDirectoryPort

_COLUMNS = "id, zone_id, email, username, given_name, family_name, origin, verified, active"


def _to_user(row: tuple[Any, ...]) -> PendingUser:
    id_, zone_id, email, username, given_name, family_name, origin, verified, active = row
    return PendingUser(
        id=str(id_),
        zone_id=str(zone_id),
        email=str(email),
        username=username,
        given_name=given_name,
        family_name=family_name,
        origin=str(origin),
        verified=bool(verified),
        active=bool(active),
    )


class PgUserDirectory(UserDirectoryPort):
    """
    Postgres implementation of UserDirectoryPort.

    Each call borrows its own connection and commits on return; the
    workflow does not span a transaction across directory calls.
    Password hashing runs in a worker thread to keep bcrypt off the event loop.
    Emails are unique per zone (UNIQUE (zone_id, email)).
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        *,
        hash_password: Callable[[str], str],
    ) -> None:
        self._pool = pool
        self._hash_password = hash_password

    async def create_user(self, candidate: NewUser) -> CreateUserResult:
        sql = f"""
        INSERT INTO users
            (zone_id, email, username, password_hash, given_name, family_name,
             origin, verified, active)
        VALUES (%s, %s, %s, %s, %s, %s, %s, FALSE, FALSE)
        ON CONFLICT (zone_id, email) DO NOTHING
        RETURNING {_COLUMNS}
        """
        password_hash = await asyncio.to_thread(self._hash_password, candidate.password)
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    sql,
                    (
                        candidate.zone_id,
                        candidate.email,
                        candidate.email,
                        password_hash,
                        candidate.given_name,
                        candidate.family_name,
                        candidate.origin,
                    ),
                )
                row = await cur.fetchone()
            if row:
                return Created(_to_user(row))

            existing = await self._fetch_by_email(conn, candidate.email, candidate.zone_id)

        if existing is None:
            raise RuntimeError("create_user conflicted but no existing row was found")
        return Conflict(existing)

    async def query_by_email(self, email: str, zone_id: str) -> Optional[PendingUser]:
        async with self._pool.connection() as conn:
            return await self._fetch_by_email(conn, email, zone_id)

    async def verify_user(self, user_id: str) -> Optional[PendingUser]:
        try:
            key = uuid.UUID(user_id)
        except ValueError:
            return None
        sql = f"""
        UPDATE users
        SET verified = TRUE, active = TRUE, updated_at = now()
        WHERE id = %s
        RETURNING {_COLUMNS}
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (key,))
                row = await cur.fetchone()
        return _to_user(row) if row else None

    async def _fetch_by_email(
        self, conn: psycopg.AsyncConnection, email: str, zone_id: str
    ) -> Optional[PendingUser]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM users
        WHERE zone_id = %s AND email = LOWER(TRIM(%s))
        """
        async with conn.cursor() as cur:
            await cur.execute(sql, (zone_id, email))
            row = await cur.fetchone()
        return _to_user(row) if row else None
