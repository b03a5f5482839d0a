"""Redis adapter – RedisRecentCache."""
from __future__ import annotations

from typing import Any

from streamflow.notifications import RecentCache


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'streamflow[redis]' to use the Redis adapter") from exc


class RedisRecentCache(RecentCache):
    """Redis list under one key: ``LPUSH`` to insert, ``LTRIM`` to bound."""

    def __init__(self, url: str, key: str = "recent_notifications", **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def push_front(self, payload: str) -> None:
        await self._client.lpush(self._key, payload)

    async def trim(self, limit: int) -> None:
        await self._client.ltrim(self._key, 0, limit - 1)

    async def range_all(self) -> list[str]:
        items = await self._client.lrange(self._key, 0, -1)
        return [i.decode() if isinstance(i, bytes) else i for i in items]

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisRecentCache"]
