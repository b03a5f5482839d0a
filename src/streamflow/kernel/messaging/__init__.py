"""Kernel messaging – messages, deliveries, dead-letter envelope (ports only)."""
from streamflow.kernel.messaging.message import (
    Message,
    MessageBus,
    MessageHeaders,
    MessageId,
    MessageSerializer,
)
from streamflow.kernel.messaging.delivery import Delivery, MessageSource
from streamflow.kernel.messaging.dead_letter import FAILED_PAYLOAD_MARKER, DeadLetterEntry

__all__ = [
    "FAILED_PAYLOAD_MARKER",
    "DeadLetterEntry",
    "Delivery",
    "Message",
    "MessageBus",
    "MessageHeaders",
    "MessageId",
    "MessageSerializer",
    "MessageSource",
]
