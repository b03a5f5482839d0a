"""Kafka adapter – KafkaProducer."""
from __future__ import annotations

import json
import logging
from typing import Any

from streamflow.kernel.errors import SerializationError
from streamflow.kernel.messaging import Message, MessageBus

logger = logging.getLogger(__name__)


def _require_aiokafka() -> Any:
    try:
        import aiokafka  # type: ignore[import-untyped]
        return aiokafka
    except ImportError as exc:
        raise ImportError("Install 'streamflow[kafka]' to use the Kafka adapter") from exc


def _encode(payload: Any) -> bytes:
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode()
    try:
        return json.dumps(payload, default=str).encode()
    except (TypeError, ValueError) as exc:
        raise SerializationError("payload is not JSON serializable", cause=exc) from exc


class KafkaProducer(MessageBus):
    """aiokafka-backed producer implementing ``MessageBus``.

    ``publish`` waits for the broker acknowledgement (``send_and_wait``), so a
    returned call means the message is durable on the topic.  The message id
    is used as record key.
    """

    def __init__(self, bootstrap_servers: str, **producer_kwargs: Any) -> None:
        aiokafka = _require_aiokafka()
        producer_kwargs.setdefault("acks", "all")
        self._producer = aiokafka.AIOKafkaProducer(bootstrap_servers=bootstrap_servers, **producer_kwargs)
        self._started = False

    async def start(self) -> None:
        await self._producer.start()
        self._started = True

    async def stop(self) -> None:
        if self._started:
            await self._producer.stop()
        self._started = False

    async def __aenter__(self) -> "KafkaProducer":
        await self.start()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.stop()

    async def publish(self, message: Message[Any]) -> None:
        if not self._started:
            await self.start()
        headers = [(k, v.encode()) for k, v in message.headers.as_dict().items()]
        await self._producer.send_and_wait(
            message.topic,
            value=_encode(message.payload),
            key=message.id.encode(),
            headers=headers,
            timestamp_ms=int(message.occurred_at.timestamp() * 1000),
        )
        logger.debug("kafka.published topic=%s id=%s", message.topic, message.id)

    async def publish_batch(self, messages: list[Message[Any]]) -> None:
        for msg in messages:
            await self.publish(msg)


__all__ = ["KafkaProducer"]
