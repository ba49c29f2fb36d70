from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from redis.asyncio import Redis

import signup.domain.services as domain_services
from signup.domain.entities import ActivationCode
from signup.domain.ports.code_store import CodeStorePort

_MAX_ALLOCATION_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RedisCodeStore(CodeStorePort):
    """
    Expiring single-use codes kept as plain Redis strings.

    Keyed by the SHA-256 digest of the code, so a dump of the store does not
    reveal redeemable codes.
    Value: {"expires_at": <iso8601>, "data": <payload json>}. The key TTL
    reclaims abandoned codes; redemption is a single GETDEL so concurrent
    redeemers of one code see exactly one winner. The stored expiry is
    checked again after the read so a code is never honoured past it.
    """

    def __init__(
        self,
        redis: Redis,
        *,
        key_prefix: str = "code:",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._clock = clock

    def _key(self, code: str) -> str:
        return f"{self._prefix}{domain_services.code_digest(code)}"

    async def generate(
        self, payload: dict[str, Any], expires_at: datetime
    ) -> ActivationCode:
        data = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        record = json.dumps({"expires_at": expires_at.isoformat(), "data": data})
        ttl_ms = int((expires_at - self._clock()).total_seconds() * 1000)
        if ttl_ms <= 0:
            raise ValueError("expires_at must be in the future")

        for _ in range(_MAX_ALLOCATION_ATTEMPTS):
            code = domain_services.generate_activation_code()
            stored = await self._redis.set(self._key(code), record, px=ttl_ms, nx=True)
            if stored:
                return ActivationCode(code=code, expires_at=expires_at, data=data)
        raise RuntimeError("could not allocate a unique activation code")

    async def redeem(self, code: str) -> Optional[dict[str, Any]]:
        raw = await self._redis.getdel(self._key(code))
        return self._valid_payload(code, raw)

    async def peek(self, code: str) -> Optional[dict[str, Any]]:
        raw = await self._redis.get(self._key(code))
        return self._valid_payload(code, raw)

    def _valid_payload(
        self, code: str, raw: str | bytes | None
    ) -> Optional[dict[str, Any]]:
        if not raw:
            return None
        try:
            record = json.loads(raw)
            activation = ActivationCode(
                code=code,
                expires_at=datetime.fromisoformat(record["expires_at"]),
                data=record["data"],
            )
            payload = activation.payload
        except (ValueError, KeyError, TypeError):
            return None
        if not activation.is_valid_at(self._clock()):
            return None
        return payload
