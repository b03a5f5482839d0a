"""Notifications – JSON wire codec for queue payloads."""
from __future__ import annotations

import json

from streamflow.kernel.errors import SerializationError, ValidationError
from streamflow.kernel.messaging import MessageSerializer
from streamflow.notifications.model import NotificationRequest


class NotificationSerializer(MessageSerializer[NotificationRequest]):
    """Encode requests as ``{"message", "type", "channel", "userId"}`` JSON."""

    def serialize(self, payload: NotificationRequest) -> bytes:
        return json.dumps(payload.to_wire(), ensure_ascii=False).encode()

    def deserialize(self, data: bytes) -> NotificationRequest:
        try:
            body = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SerializationError("payload is not valid JSON", payload=data, cause=exc) from exc
        if not isinstance(body, dict):
            raise SerializationError("payload must be a JSON object", payload=data)
        try:
            return NotificationRequest.from_mapping(body)
        except ValidationError as exc:
            raise SerializationError(
                "payload is not a valid notification request",
                payload=data,
                detail={"errors": exc.errors},
                cause=exc,
            ) from exc


__all__ = ["NotificationSerializer"]
