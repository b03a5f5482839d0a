"""Notifications – persistence store and recent-cache ports."""
from __future__ import annotations

import abc
from datetime import datetime

from streamflow.application.pagination import Page, PageRequest
from streamflow.notifications.model import NotificationChannel, NotificationRecord, NotificationType


class NotificationStore(abc.ABC):
    """Port: durable, append-only log of processed notifications.

    Every list query returns records ordered by ``timestamp`` descending.
    """

    @abc.abstractmethod
    async def save(self, record: NotificationRecord) -> NotificationRecord:
        """Append *record* and return it carrying its store-generated ``id``."""

    @abc.abstractmethod
    async def recent(self, n: int) -> list[NotificationRecord]:
        """Return the *n* newest records."""

    @abc.abstractmethod
    async def by_type(self, type: NotificationType) -> list[NotificationRecord]: ...

    @abc.abstractmethod
    async def by_user(self, user_id: str) -> list[NotificationRecord]: ...

    @abc.abstractmethod
    async def by_channel(self, channel: NotificationChannel) -> list[NotificationRecord]: ...

    @abc.abstractmethod
    async def by_type_and_user(self, type: NotificationType, user_id: str) -> list[NotificationRecord]: ...

    @abc.abstractmethod
    async def by_time_range(self, start: datetime, end: datetime) -> list[NotificationRecord]:
        """Records with ``start < timestamp < end``."""

    @abc.abstractmethod
    async def page(self, request: PageRequest) -> Page[NotificationRecord]: ...

    @abc.abstractmethod
    async def count_by_type(self, type: NotificationType) -> int: ...

    @abc.abstractmethod
    async def count_all(self) -> int: ...


class RecentCache(abc.ABC):
    """Port: bounded, most-recent-first list of serialized payloads."""

    @abc.abstractmethod
    async def push_front(self, payload: str) -> None: ...

    @abc.abstractmethod
    async def trim(self, limit: int) -> None:
        """Keep only the first *limit* entries.  Idempotent."""

    @abc.abstractmethod
    async def range_all(self) -> list[str]: ...


__all__ = ["NotificationStore", "RecentCache"]
