"""Kernel messaging – consumer-side ports.

A :class:`MessageSource` yields :class:`Delivery` objects for one topic and
consumer group.  The queue behind it redelivers every delivery that was not
acknowledged (at-least-once), and counts how often it handed the same message
out; that count lives on the delivery, never in the payload.
"""
from __future__ import annotations

import abc
from collections.abc import AsyncIterator

from streamflow.kernel.messaging.message import Message


class Delivery(abc.ABC):
    """One hand-out of a queued message to a consumer."""

    def __init__(self, message: Message[bytes], delivery_count: int = 1) -> None:
        self.message = message
        self.delivery_count = delivery_count
        self._acked = False

    @property
    def acked(self) -> bool:
        return self._acked

    @property
    def payload(self) -> bytes:
        return self.message.payload or b""

    @property
    def redelivered(self) -> bool:
        return self.delivery_count > 1

    async def ack(self) -> None:
        """Acknowledge the message to the queue.  Repeated calls are no-ops."""
        if self._acked:
            return
        await self._commit()
        self._acked = True

    @abc.abstractmethod
    async def _commit(self) -> None:
        """Transport-specific acknowledgement."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.message.id!r}, topic={self.message.topic!r}, "
            f"delivery_count={self.delivery_count}, acked={self._acked})"
        )


class MessageSource(abc.ABC):
    """Port: ordered stream of deliveries for one consumer group."""

    @abc.abstractmethod
    async def start(self) -> None: ...

    @abc.abstractmethod
    async def stop(self) -> None: ...

    @abc.abstractmethod
    def __aiter__(self) -> AsyncIterator[Delivery]: ...

    async def __aenter__(self) -> "MessageSource":
        await self.start()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.stop()


__all__ = ["Delivery", "MessageSource"]
