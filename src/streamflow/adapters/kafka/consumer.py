"""Kafka adapter – KafkaMessageSource."""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import AsyncIterator, Iterable
from datetime import UTC, datetime
from typing import Any

from streamflow.adapters.kafka.offsets import OffsetTracker
from streamflow.kernel.messaging import Delivery, Message, MessageHeaders, MessageSource

logger = logging.getLogger(__name__)


def _require_aiokafka() -> Any:
    try:
        import aiokafka  # type: ignore[import-untyped]
        return aiokafka
    except ImportError as exc:
        raise ImportError("Install 'streamflow[kafka]' to use the Kafka adapter") from exc


class KafkaDelivery(Delivery):
    """A consumed record; ``ack`` commits through the source's offset tracker."""

    def __init__(self, message: Message[bytes], delivery_count: int, source: "KafkaMessageSource", partition: Any, offset: int) -> None:
        super().__init__(message, delivery_count)
        self._source = source
        self.partition = partition
        self.offset = offset

    async def _commit(self) -> None:
        await self._source._commit(self.partition, self.offset)


class KafkaMessageSource(MessageSource):
    """aiokafka consumer for one topic under one consumer group.

    Auto-commit is disabled: offsets move only when deliveries are
    acknowledged, and never past an unacknowledged one.  A record that is
    read again in the same process gets a higher ``delivery_count``; the
    counts are dropped once the commit point passes them or the partition is
    revoked.
    """

    def __init__(self, bootstrap_servers: str, topic: str, group_id: str, **kwargs: Any) -> None:
        aiokafka = _require_aiokafka()
        kwargs.setdefault("auto_offset_reset", "earliest")
        self._aiokafka = aiokafka
        self._topic = topic
        self._group_id = group_id
        self._consumer = aiokafka.AIOKafkaConsumer(
            bootstrap_servers=bootstrap_servers,
            group_id=group_id,
            enable_auto_commit=False,
            **kwargs,
        )
        self._consumer.subscribe([topic], listener=_revocation_listener(aiokafka, self))
        self._tracker = OffsetTracker()
        self._seen: defaultdict[Any, Counter[int]] = defaultdict(Counter)

    @property
    def tracker(self) -> OffsetTracker:
        return self._tracker

    def seen(self, partition: Any) -> dict[int, int]:
        """Hand-out counts of the offsets above the commit point."""
        return dict(self._seen.get(partition, {}))

    async def start(self) -> None:
        await self._consumer.start()
        logger.info("kafka.consumer_started topic=%s group=%s", self._topic, self._group_id)

    async def stop(self) -> None:
        await self._consumer.stop()
        logger.info("kafka.consumer_stopped topic=%s group=%s", self._topic, self._group_id)

    def __aiter__(self) -> AsyncIterator[Delivery]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Delivery]:
        async for record in self._consumer:
            yield self._to_delivery(record)

    def _to_delivery(self, record: Any) -> KafkaDelivery:
        partition = self._aiokafka.TopicPartition(record.topic, record.partition)
        self._tracker.track(partition, record.offset)
        counts = self._seen[partition]
        counts[record.offset] += 1
        raw_headers = {k: v.decode("utf-8", errors="replace") for k, v in (record.headers or ())}
        key = record.key.decode("utf-8", errors="replace") if record.key else None
        message: Message[bytes] = Message(
            id=key or f"{record.topic}-{record.partition}-{record.offset}",
            topic=record.topic,
            payload=record.value or b"",
            headers=MessageHeaders.from_dict(raw_headers),
            occurred_at=datetime.fromtimestamp(record.timestamp / 1000.0, tz=UTC),
        )
        return KafkaDelivery(message, counts[record.offset], self, partition, record.offset)

    async def _commit(self, partition: Any, offset: int) -> None:
        commit_point = self._tracker.ack(partition, offset)
        if commit_point is None:
            return
        await self._consumer.commit({partition: commit_point})
        counts = self._seen.get(partition)
        if counts:
            for done in [o for o in counts if o < commit_point]:
                del counts[done]
        logger.debug("kafka.committed topic=%s partition=%s offset=%d", partition.topic, partition.partition, commit_point)

    def _revoked(self, partitions: Iterable[Any]) -> None:
        partitions = list(partitions)
        self._tracker.forget(partitions)
        for partition in partitions:
            self._seen.pop(partition, None)
        if partitions:
            logger.info("kafka.partitions_revoked group=%s partitions=%s", self._group_id, partitions)


def _revocation_listener(aiokafka: Any, source: KafkaMessageSource) -> Any:
    """Rebalance listener that drops the bookkeeping of revoked partitions."""

    class _Listener(aiokafka.ConsumerRebalanceListener):
        async def on_partitions_revoked(self, revoked: Any) -> None:
            source._revoked(revoked)

        async def on_partitions_assigned(self, assigned: Any) -> None:
            logger.info("kafka.partitions_assigned group=%s partitions=%s", source._group_id, list(assigned))

    return _Listener()


__all__ = ["KafkaDelivery", "KafkaMessageSource"]
