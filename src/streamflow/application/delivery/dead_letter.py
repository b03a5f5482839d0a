"""Application delivery – dead-letter routing and review sink."""
from __future__ import annotations

import collections
import logging

from streamflow.kernel.errors import SerializationError
from streamflow.kernel.messaging import DeadLetterEntry, Delivery, Message, MessageBus, MessageHeaders, MessageSource
from streamflow.kernel.time import Clock, SystemClock
from streamflow.observability.metrics import NotificationMetrics

logger = logging.getLogger(__name__)

FAILURE_REASON_HEADER = "x-failure-reason"
UNREADABLE_REASON = "unreadable dead-letter envelope"


class DeadLetterRouter:
    """Publishes exhausted payloads to the dead-letter topic.

    A single publish, never retried here: when it raises, the caller keeps
    the original delivery unacknowledged so the queue hands it out again.
    """

    def __init__(
        self,
        bus: MessageBus,
        dlq_topic: str,
        *,
        metrics: NotificationMetrics | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._bus = bus
        self._topic = dlq_topic
        self._metrics = metrics or NotificationMetrics()
        self._clock: Clock = clock or SystemClock()

    @property
    def topic(self) -> str:
        return self._topic

    async def route(
        self,
        payload: bytes,
        reason: str,
        *,
        attempts: int,
        error_type: str = "",
        message_id: str = "",
        source_topic: str = "",
    ) -> DeadLetterEntry:
        entry = DeadLetterEntry(
            message_id=message_id,
            topic=source_topic,
            payload=payload,
            reason=reason,
            error_type=error_type,
            attempts=attempts,
            failed_at=self._clock.now(),
        )
        message: Message[bytes] = Message(
            id=entry.id,
            topic=self._topic,
            payload=entry.to_wire(),
            headers=MessageHeaders(
                correlation_id=message_id or None,
                extra={FAILURE_REASON_HEADER: reason[:256]},
            ),
            occurred_at=entry.failed_at,
        )
        await self._bus.publish(message)
        self._metrics.increment_dlq()
        logger.warning(
            "dlq.routed id=%s message_id=%s attempts=%d error_type=%s", entry.id, message_id, attempts, error_type
        )
        return entry


class DeadLetterSink:
    """Passive consumer of the dead-letter topic.

    Every entry is logged for manual review, kept in a bounded in-memory
    buffer and acknowledged.  Nothing flows back to the main topic.
    """

    def __init__(self, source: MessageSource, *, buffer: int = 1000) -> None:
        if buffer < 1:
            raise ValueError("buffer must be >= 1")
        self._source = source
        self._entries: collections.deque[DeadLetterEntry] = collections.deque(maxlen=buffer)
        self._received = 0

    @property
    def entries(self) -> list[DeadLetterEntry]:
        """Oldest first."""
        return list(self._entries)

    @property
    def received(self) -> int:
        return self._received

    async def handle(self, delivery: Delivery) -> DeadLetterEntry:
        try:
            entry = DeadLetterEntry.from_wire(delivery.payload)
        except SerializationError as exc:
            logger.error("dlq.unreadable id=%s error=%s", delivery.message.id, exc.message)
            entry = DeadLetterEntry(
                id=delivery.message.id,
                topic=delivery.message.topic,
                payload=delivery.payload,
                reason=UNREADABLE_REASON,
                error_type=type(exc).__name__,
            )
        logger.warning(
            "dlq.review_required id=%s message_id=%s attempts=%d reason=%s payload=%s",
            entry.id,
            entry.message_id,
            entry.attempts,
            entry.reason,
            entry.payload_text,
        )
        self._entries.append(entry)
        self._received += 1
        try:
            await delivery.ack()
        except Exception:
            logger.exception("dlq.ack_failed id=%s", entry.id)
        return entry

    async def run(self) -> None:
        async for delivery in self._source:
            await self.handle(delivery)


__all__ = ["FAILURE_REASON_HEADER", "UNREADABLE_REASON", "DeadLetterRouter", "DeadLetterSink"]
