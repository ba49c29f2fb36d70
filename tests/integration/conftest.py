# tests/integration/conftest.py
import os
from pathlib import Path

import psycopg
import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool
from redis.asyncio import Redis
from redis.exceptions import RedisError

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(
        os.environ.get("REDIS_URL", "redis://redis:6379/0"),
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=1,
    )
    try:
        await r.ping()
    except (RedisError, OSError):
        await r.aclose()
        pytest.skip("redis is not reachable")
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def pg_pool():
    dsn = os.environ.get("DATABASE_URL", "postgresql://app:app@db:5432/app")
    try:
        conn = await psycopg.AsyncConnection.connect(dsn, connect_timeout=2)
    except psycopg.OperationalError:
        pytest.skip("postgres is not reachable")

    async with conn:
        for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
            await conn.execute(path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT INTO identity_zones (id, name, subdomain) VALUES ('it-zone', 'IT Zone', 'it') "
            "ON CONFLICT (id) DO NOTHING"
        )
        await conn.execute("DELETE FROM users WHERE email LIKE '%@it.example.com'")
        await conn.commit()

    pool = AsyncConnectionPool(dsn, min_size=1, max_size=4, open=False)
    await pool.open()
    try:
        yield pool
    finally:
        async with pool.connection() as c:
            await c.execute("DELETE FROM users WHERE email LIKE '%@it.example.com'")
            await c.execute("DELETE FROM oauth_clients WHERE client_id LIKE 'it-%'")
        await pool.close()
