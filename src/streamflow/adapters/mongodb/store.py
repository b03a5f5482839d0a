"""MongoDB adapter – MongoNotificationStore."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from streamflow.application.pagination import Page, PageRequest
from streamflow.notifications import NotificationChannel, NotificationRecord, NotificationStore, NotificationType


def _require_motor() -> Any:
    try:
        import motor.motor_asyncio as motor_asyncio  # type: ignore[import-untyped]
        return motor_asyncio
    except ImportError as exc:
        raise ImportError("Install 'streamflow[mongodb]' to use the MongoDB adapter") from exc


_NEWEST_FIRST = [("timestamp", -1), ("_id", -1)]


class MongoNotificationStore(NotificationStore):
    """Notification log in one MongoDB collection.

    Documents look like::

        {"_id": ObjectId, "message": str, "type": "INFO", "channel": "SYSTEM",
         "userId": str | None, "timestamp": datetime}

    Records are inserted once and never updated; ``_id`` is generated by the
    server and returned as the record id.

    Usage::

        store = MongoNotificationStore.from_url("mongodb://localhost:27017", "streamflow")
        await store.create_indexes()
    """

    def __init__(self, collection: Any) -> None:
        self._col = collection

    @classmethod
    def from_url(cls, url: str, database: str, collection: str = "logs", **kwargs: Any) -> "MongoNotificationStore":
        motor_asyncio = _require_motor()
        client = motor_asyncio.AsyncIOMotorClient(url, tz_aware=True, **kwargs)
        return cls(client[database][collection])

    # ------------------------------------------------------------------
    # Document mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _to_document(record: NotificationRecord) -> dict[str, Any]:
        return {
            "message": record.message,
            "type": record.type.value,
            "channel": record.channel.value,
            "userId": record.user_id,
            "timestamp": record.timestamp,
        }

    @staticmethod
    def _from_document(doc: dict[str, Any]) -> NotificationRecord:
        timestamp: datetime = doc["timestamp"]
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return NotificationRecord(
            id=str(doc["_id"]),
            message=doc["message"],
            type=NotificationType(doc["type"]),
            channel=NotificationChannel(doc.get("channel") or NotificationChannel.SYSTEM.value),
            user_id=doc.get("userId"),
            timestamp=timestamp,
        )

    async def _find(self, query: dict[str, Any], *, skip: int = 0, limit: int = 0) -> list[NotificationRecord]:
        cursor = self._col.find(query).sort(_NEWEST_FIRST)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self._from_document(doc) async for doc in cursor]

    # ------------------------------------------------------------------
    # NotificationStore
    # ------------------------------------------------------------------

    async def save(self, record: NotificationRecord) -> NotificationRecord:
        result = await self._col.insert_one(self._to_document(record))
        return record.with_id(str(result.inserted_id))

    async def recent(self, n: int) -> list[NotificationRecord]:
        return await self._find({}, limit=n)

    async def by_type(self, type: NotificationType) -> list[NotificationRecord]:
        return await self._find({"type": type.value})

    async def by_user(self, user_id: str) -> list[NotificationRecord]:
        return await self._find({"userId": user_id})

    async def by_channel(self, channel: NotificationChannel) -> list[NotificationRecord]:
        return await self._find({"channel": channel.value})

    async def by_type_and_user(self, type: NotificationType, user_id: str) -> list[NotificationRecord]:
        return await self._find({"type": type.value, "userId": user_id})

    async def by_time_range(self, start: datetime, end: datetime) -> list[NotificationRecord]:
        return await self._find({"timestamp": {"$gt": start, "$lt": end}})

    async def page(self, request: PageRequest) -> Page[NotificationRecord]:
        total = await self._col.count_documents({})
        items = await self._find({}, skip=request.offset, limit=request.size)
        return Page(items=items, total=total, page=request.page, size=request.size)

    async def count_by_type(self, type: NotificationType) -> int:
        return await self._col.count_documents({"type": type.value})

    async def count_all(self) -> int:
        return await self._col.count_documents({})

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def create_indexes(self) -> None:
        """Indexes backing every query above; safe to call on each start."""
        await self._col.create_index([("timestamp", -1)])
        await self._col.create_index([("type", 1), ("timestamp", -1)])
        await self._col.create_index([("userId", 1), ("timestamp", -1)])
        await self._col.create_index([("channel", 1), ("timestamp", -1)])
        await self._col.create_index([("type", 1), ("userId", 1), ("timestamp", -1)])

    async def ping(self) -> bool:
        await self._col.database.command("ping")
        return True


__all__ = ["MongoNotificationStore"]
