"""Unit tests for kernel messaging primitives."""

from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime

import pytest

from streamflow.kernel.errors import SerializationError
from streamflow.kernel.messaging import (
    FAILED_PAYLOAD_MARKER,
    DeadLetterEntry,
    Delivery,
    Message,
    MessageHeaders,
)


class _CountingDelivery(Delivery):
    def __init__(self, message: Message[bytes], delivery_count: int = 1) -> None:
        super().__init__(message, delivery_count)
        self.commits = 0

    async def _commit(self) -> None:
        self.commits += 1


# ---------------------------------------------------------------------------
# MessageHeaders
# ---------------------------------------------------------------------------


class TestMessageHeaders:
    def test_as_dict_contains_content_type(self) -> None:
        assert MessageHeaders().as_dict() == {"content-type": "application/json"}

    def test_as_dict_contains_correlation_and_extra(self) -> None:
        flat = MessageHeaders(correlation_id="c-1", extra={"x-failure-reason": "boom"}).as_dict()
        assert flat["correlation-id"] == "c-1"
        assert flat["x-failure-reason"] == "boom"

    def test_from_dict_splits_known_keys(self) -> None:
        headers = MessageHeaders.from_dict({"correlation-id": "c-1", "content-type": "text/plain", "k": "v"})
        assert headers.correlation_id == "c-1"
        assert headers.content_type == "text/plain"
        assert headers.extra == {"k": "v"}


# ---------------------------------------------------------------------------
# Message
# ---------------------------------------------------------------------------


class TestMessage:
    def test_ids_are_unique(self) -> None:
        assert Message().id != Message().id

    def test_is_frozen(self) -> None:
        msg = Message(topic="t", payload=b"x")
        with pytest.raises(Exception):
            msg.topic = "other"  # type: ignore[misc]

    def test_occurred_at_is_aware(self) -> None:
        assert Message().occurred_at.tzinfo is not None


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------


class TestDelivery:
    def test_ack_commits_once(self) -> None:
        delivery = _CountingDelivery(Message(topic="t", payload=b"x"))

        async def run() -> None:
            await delivery.ack()
            await delivery.ack()

        asyncio.run(run())
        assert delivery.acked is True
        assert delivery.commits == 1

    def test_payload_defaults_to_empty_bytes(self) -> None:
        assert _CountingDelivery(Message(topic="t")).payload == b""

    def test_redelivered(self) -> None:
        msg = Message(topic="t", payload=b"x")
        assert _CountingDelivery(msg).redelivered is False
        assert _CountingDelivery(msg, delivery_count=2).redelivered is True


# ---------------------------------------------------------------------------
# DeadLetterEntry
# ---------------------------------------------------------------------------


class TestDeadLetterEntry:
    def _entry(self) -> DeadLetterEntry:
        return DeadLetterEntry(
            message_id="m-1",
            topic="user-notifications",
            payload=b'{"message":"hi"}',
            reason="store down",
            error_type="ConnectionError",
            attempts=3,
            failed_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

    def test_wire_carries_marker(self) -> None:
        body = json.loads(self._entry().to_wire())
        assert body["marker"] == FAILED_PAYLOAD_MARKER
        assert body["payload"] == '{"message":"hi"}'
        assert body["attempts"] == 3
        assert body["failedAt"] == "2026-01-01T00:00:00+00:00"

    def test_from_wire_restores_entry(self) -> None:
        entry = self._entry()
        assert DeadLetterEntry.from_wire(entry.to_wire()) == entry

    def test_from_wire_rejects_non_json(self) -> None:
        with pytest.raises(SerializationError):
            DeadLetterEntry.from_wire(b"\xff\xfe")

    def test_from_wire_rejects_missing_marker(self) -> None:
        with pytest.raises(SerializationError, match="marker"):
            DeadLetterEntry.from_wire(b'{"payload": "x"}')

    @pytest.mark.parametrize("attempts", ['"three"', "[3]", '{"n": 3}'])
    def test_from_wire_rejects_non_integer_attempts(self, attempts: str) -> None:
        data = f'{{"marker": "FAILED_PAYLOAD", "attempts": {attempts}}}'.encode()
        with pytest.raises(SerializationError, match="attempts"):
            DeadLetterEntry.from_wire(data)

    def test_from_wire_null_attempts_is_zero(self) -> None:
        entry = DeadLetterEntry.from_wire(b'{"marker": "FAILED_PAYLOAD", "attempts": null}')
        assert entry.attempts == 0

    def test_payload_text_replaces_invalid_utf8(self) -> None:
        assert DeadLetterEntry(payload=b"ok\xff").payload_text == "ok�"
