"""Application delivery – NotificationIntake."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from streamflow.kernel.messaging import Message, MessageBus, MessageSerializer
from streamflow.kernel.time import Clock, SystemClock
from streamflow.notifications import NotificationAck, NotificationRequest, NotificationSerializer
from streamflow.observability.metrics import NotificationMetrics

logger = logging.getLogger(__name__)


class NotificationIntake:
    """Validates requests and puts them on the main topic.

    Validation failures raise before anything is published; the store and
    the recent cache are never touched here.
    """

    def __init__(
        self,
        bus: MessageBus,
        topic: str,
        *,
        serializer: MessageSerializer[NotificationRequest] | None = None,
        metrics: NotificationMetrics | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._bus = bus
        self._topic = topic
        self._serializer = serializer or NotificationSerializer()
        self._metrics = metrics or NotificationMetrics()
        self._clock: Clock = clock or SystemClock()

    async def submit(self, request: NotificationRequest) -> NotificationAck:
        request.validate()
        queued_at = self._clock.now()
        message: Message[bytes] = Message(
            topic=self._topic,
            payload=self._serializer.serialize(request),
            occurred_at=queued_at,
        )
        await self._bus.publish(message)
        self._metrics.increment_sent()
        logger.info("intake.queued id=%s type=%s channel=%s", message.id, request.type.value, request.channel.value)
        return NotificationAck(
            message=request.message,
            type=request.type,
            channel=request.channel,
            user_id=request.user_id,
            queued_at=queued_at,
            message_id=message.id,
        )

    async def submit_raw(self, data: Mapping[str, Any]) -> NotificationAck:
        """Build the request from loose input, then :meth:`submit` it."""
        return await self.submit(NotificationRequest.from_mapping(data))


__all__ = ["NotificationIntake"]
