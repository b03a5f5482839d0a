"""Application delivery – NotificationRecorder."""
from __future__ import annotations

from streamflow.kernel.time import Clock, SystemClock
from streamflow.notifications import NotificationRecord, NotificationRequest, NotificationStore, RecentCache


class NotificationRecorder:
    """Writes a processed notification to the store and the recent cache.

    The two writes are separate steps and not transactional: the consumer
    commits the record first and may retry the cache step on its own.
    """

    def __init__(self, store: NotificationStore, cache: RecentCache, *, recent_limit: int = 10, clock: Clock | None = None) -> None:
        if recent_limit < 1:
            raise ValueError("recent_limit must be >= 1")
        self._store = store
        self._cache = cache
        self._recent_limit = recent_limit
        self._clock: Clock = clock or SystemClock()

    @property
    def recent_limit(self) -> int:
        return self._recent_limit

    async def persist(self, request: NotificationRequest) -> NotificationRecord:
        record = NotificationRecord.from_request(request, self._clock.now())
        return await self._store.save(record)

    async def cache(self, payload: str) -> None:
        await self._cache.push_front(payload)
        await self._cache.trim(self._recent_limit)


__all__ = ["NotificationRecorder"]
