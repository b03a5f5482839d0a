"""Application queries – NotificationHistory."""
from __future__ import annotations

from datetime import UTC, datetime

from streamflow.application.pagination import Page, PageRequest
from streamflow.kernel.errors import ValidationError
from streamflow.notifications import (
    NotificationChannel,
    NotificationRecord,
    NotificationStore,
    NotificationType,
    RecentCache,
)

DEFAULT_RECENT = 10
DEFAULT_PAGE_SIZE = 10


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _required(field: str, value: object) -> object:
    # Filters never fall back to the intake defaults.
    if value is None or not str(value).strip():
        raise ValidationError.for_field(field, "must not be blank", value)
    return value


class NotificationHistory:
    """Read paths over committed state: the recent cache and the store."""

    def __init__(self, store: NotificationStore, cache: RecentCache) -> None:
        self._store = store
        self._cache = cache

    async def recent(self) -> list[str]:
        """Serialized payloads from the recent cache, newest first."""
        return await self._cache.range_all()

    async def recent_records(self, n: int = DEFAULT_RECENT) -> list[NotificationRecord]:
        if n < 1:
            raise ValidationError.for_field("n", "must be >= 1", n)
        return await self._store.recent(n)

    async def history(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> Page[NotificationRecord]:
        return await self._store.page(PageRequest(page=page, size=size))

    async def by_type(self, type: NotificationType | str) -> list[NotificationRecord]:
        return await self._store.by_type(NotificationType.parse(_required("type", type)))

    async def by_user(self, user_id: str) -> list[NotificationRecord]:
        if not user_id:
            raise ValidationError.for_field("userId", "must not be blank")
        return await self._store.by_user(user_id)

    async def by_channel(self, channel: NotificationChannel | str) -> list[NotificationRecord]:
        return await self._store.by_channel(NotificationChannel.parse(_required("channel", channel)))

    async def by_type_and_user(self, type: NotificationType | str, user_id: str) -> list[NotificationRecord]:
        if not user_id:
            raise ValidationError.for_field("userId", "must not be blank")
        return await self._store.by_type_and_user(NotificationType.parse(_required("type", type)), user_id)

    async def by_time_range(self, start: datetime, end: datetime) -> list[NotificationRecord]:
        """Records strictly between *start* and *end*.  Naive bounds are UTC."""
        start, end = _aware(start), _aware(end)
        if start > end:
            raise ValidationError.for_field("start", "must not be after end", start.isoformat())
        return await self._store.by_time_range(start, end)


__all__ = ["DEFAULT_PAGE_SIZE", "DEFAULT_RECENT", "NotificationHistory"]
