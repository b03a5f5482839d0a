"""Kernel messaging – dead-letter envelope."""
from __future__ import annotations

import dataclasses
import json
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from streamflow.kernel.errors import SerializationError

FAILED_PAYLOAD_MARKER = "FAILED_PAYLOAD"


@dataclasses.dataclass(frozen=True)
class DeadLetterEntry:
    """A message that could not be processed after all retries."""

    id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    message_id: str = ""
    topic: str = ""
    payload: bytes = b""
    reason: str = ""
    error_type: str = ""
    attempts: int = 0
    failed_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))

    @property
    def payload_text(self) -> str:
        return self.payload.decode("utf-8", errors="replace")

    def to_wire(self) -> bytes:
        """Encode as the JSON envelope published on the dead-letter topic."""
        body: dict[str, Any] = {
            "marker": FAILED_PAYLOAD_MARKER,
            "id": self.id,
            "messageId": self.message_id,
            "topic": self.topic,
            "payload": self.payload_text,
            "reason": self.reason,
            "errorType": self.error_type,
            "attempts": self.attempts,
            "failedAt": self.failed_at.isoformat(),
        }
        return json.dumps(body, ensure_ascii=False).encode()

    @classmethod
    def from_wire(cls, data: bytes) -> "DeadLetterEntry":
        """Decode an envelope produced by :meth:`to_wire`.

        Raises :class:`SerializationError` when *data* is not such an envelope.
        """
        try:
            body = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SerializationError("dead-letter envelope is not JSON", payload=data, cause=exc) from exc
        if not isinstance(body, dict) or body.get("marker") != FAILED_PAYLOAD_MARKER:
            raise SerializationError("missing FAILED_PAYLOAD marker", payload=data)
        try:
            failed_at = datetime.fromisoformat(body["failedAt"])
        except (KeyError, TypeError, ValueError):
            failed_at = datetime.now(UTC)
        try:
            attempts = int(body.get("attempts") or 0)
        except (TypeError, ValueError) as exc:
            raise SerializationError("dead-letter attempts is not an integer", payload=data, cause=exc) from exc
        return cls(
            id=str(body.get("id") or uuid4()),
            message_id=str(body.get("messageId", "")),
            topic=str(body.get("topic", "")),
            payload=str(body.get("payload", "")).encode(),
            reason=str(body.get("reason", "")),
            error_type=str(body.get("errorType", "")),
            attempts=attempts,
            failed_at=failed_at,
        )


__all__ = ["FAILED_PAYLOAD_MARKER", "DeadLetterEntry"]
