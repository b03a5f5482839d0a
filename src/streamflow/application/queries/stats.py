"""Application queries – StatsAggregator."""
from __future__ import annotations

from streamflow.notifications import NotificationStats, NotificationStore, NotificationType


class StatsAggregator:
    """Counts recomputed from the store on every call; nothing is cached."""

    def __init__(self, store: NotificationStore) -> None:
        self._store = store

    async def stats(self) -> NotificationStats:
        return NotificationStats(
            total=await self._store.count_all(),
            info_count=await self._store.count_by_type(NotificationType.INFO),
            warn_count=await self._store.count_by_type(NotificationType.WARN),
            error_count=await self._store.count_by_type(NotificationType.ERROR),
        )


__all__ = ["StatsAggregator"]
