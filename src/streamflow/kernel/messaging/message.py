"""Kernel messaging – message primitives and bus ports."""
from __future__ import annotations

import abc
import dataclasses
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import uuid4

T = TypeVar("T")

type MessageId = str


@dataclasses.dataclass(frozen=True)
class MessageHeaders:
    """Envelope metadata propagated with every message."""

    correlation_id: str | None = None
    content_type: str = "application/json"
    extra: dict[str, str] = dataclasses.field(default_factory=dict)

    def as_dict(self) -> dict[str, str]:
        """Flatten into transport headers (``correlation-id`` plus *extra*)."""
        flat = dict(self.extra)
        flat["content-type"] = self.content_type
        if self.correlation_id:
            flat["correlation-id"] = self.correlation_id
        return flat

    @classmethod
    def from_dict(cls, raw: dict[str, str]) -> "MessageHeaders":
        extra = {k: v for k, v in raw.items() if k not in ("content-type", "correlation-id")}
        return cls(
            correlation_id=raw.get("correlation-id"),
            content_type=raw.get("content-type", "application/json"),
            extra=extra,
        )


@dataclasses.dataclass(frozen=True)
class Message(Generic[T]):
    """Transport-agnostic message envelope."""

    id: MessageId = dataclasses.field(default_factory=lambda: str(uuid4()))
    topic: str = ""
    payload: T | None = None
    headers: MessageHeaders = dataclasses.field(default_factory=MessageHeaders)
    occurred_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))


class MessageSerializer(abc.ABC, Generic[T]):
    """Port: serialize / deserialize message payloads."""

    @abc.abstractmethod
    def serialize(self, payload: T) -> bytes: ...

    @abc.abstractmethod
    def deserialize(self, data: bytes) -> T: ...


class MessageBus(abc.ABC):
    """Port: publish messages to a durable topic (Kafka, in-memory…)."""

    @abc.abstractmethod
    async def publish(self, message: Message[Any]) -> None: ...

    @abc.abstractmethod
    async def publish_batch(self, messages: list[Message[Any]]) -> None: ...


__all__ = [
    "Message",
    "MessageBus",
    "MessageHeaders",
    "MessageId",
    "MessageSerializer",
]
