"""Application – NotificationService facade."""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from streamflow.application.delivery import NotificationIntake
from streamflow.application.pagination import Page
from streamflow.application.queries import DEFAULT_PAGE_SIZE, DEFAULT_RECENT, NotificationHistory, StatsAggregator
from streamflow.notifications import (
    NotificationAck,
    NotificationChannel,
    NotificationRecord,
    NotificationRequest,
    NotificationStats,
    NotificationType,
)


class NotificationService:
    """Everything an outer adapter (HTTP, CLI) may ask of the pipeline.

    Writes only ever go through intake; reads go to the store or the recent
    cache and observe committed state.
    """

    def __init__(self, intake: NotificationIntake, history: NotificationHistory, stats: StatsAggregator) -> None:
        self._intake = intake
        self._history = history
        self._stats = stats

    async def submit(self, request: NotificationRequest) -> NotificationAck:
        return await self._intake.submit(request)

    async def submit_raw(self, data: Mapping[str, Any]) -> NotificationAck:
        return await self._intake.submit_raw(data)

    async def recent(self) -> list[str]:
        return await self._history.recent()

    async def recent_records(self, n: int = DEFAULT_RECENT) -> list[NotificationRecord]:
        return await self._history.recent_records(n)

    async def history(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> Page[NotificationRecord]:
        return await self._history.history(page, size)

    async def by_type(self, type: NotificationType | str) -> list[NotificationRecord]:
        return await self._history.by_type(type)

    async def by_user(self, user_id: str) -> list[NotificationRecord]:
        return await self._history.by_user(user_id)

    async def by_channel(self, channel: NotificationChannel | str) -> list[NotificationRecord]:
        return await self._history.by_channel(channel)

    async def by_type_and_user(self, type: NotificationType | str, user_id: str) -> list[NotificationRecord]:
        return await self._history.by_type_and_user(type, user_id)

    async def by_time_range(self, start: datetime, end: datetime) -> list[NotificationRecord]:
        return await self._history.by_time_range(start, end)

    async def stats(self) -> NotificationStats:
        return await self._stats.stats()


__all__ = ["NotificationService"]
