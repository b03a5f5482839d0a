"""Unit tests for notification value objects and the wire codec."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from streamflow.kernel.errors import SerializationError, ValidationError
from streamflow.notifications import (
    NotificationAck,
    NotificationChannel,
    NotificationRecord,
    NotificationRequest,
    NotificationSerializer,
    NotificationStats,
    NotificationType,
)

_TS = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestEnums:
    def test_parse_is_case_insensitive(self) -> None:
        assert NotificationType.parse("warn") is NotificationType.WARN
        assert NotificationChannel.parse(" Email ") is NotificationChannel.EMAIL

    def test_parse_defaults(self) -> None:
        assert NotificationType.parse(None) is NotificationType.INFO
        assert NotificationChannel.parse("") is NotificationChannel.SYSTEM

    def test_parse_passes_members_through(self) -> None:
        assert NotificationType.parse(NotificationType.ERROR) is NotificationType.ERROR

    def test_parse_unknown_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            NotificationChannel.parse("FAX")
        assert exc_info.value.errors[0]["field"] == "channel"
        assert exc_info.value.errors[0]["value"] == "FAX"


# ---------------------------------------------------------------------------
# NotificationRequest
# ---------------------------------------------------------------------------


class TestNotificationRequest:
    def test_defaults(self) -> None:
        req = NotificationRequest("hello")
        assert req.type is NotificationType.INFO
        assert req.channel is NotificationChannel.SYSTEM
        assert req.user_id is None

    @pytest.mark.parametrize("message", ["", "   ", "\n\t"])
    def test_validate_rejects_blank(self, message: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            NotificationRequest(message).validate()
        assert exc_info.value.errors[0]["field"] == "message"

    def test_validate_returns_self(self) -> None:
        req = NotificationRequest("hi")
        assert req.validate() is req

    def test_from_mapping_accepts_loose_input(self) -> None:
        req = NotificationRequest.from_mapping({"message": "hi", "type": "error", "channel": "sms", "userId": "u1"})
        assert req == NotificationRequest("hi", NotificationType.ERROR, NotificationChannel.SMS, "u1")

    def test_from_mapping_accepts_snake_case_user_id(self) -> None:
        assert NotificationRequest.from_mapping({"message": "hi", "user_id": "u2"}).user_id == "u2"

    def test_from_mapping_collects_every_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            NotificationRequest.from_mapping({"message": " ", "type": "LOUD", "channel": "FAX"})
        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"message", "type", "channel"}

    def test_from_mapping_missing_message(self) -> None:
        with pytest.raises(ValidationError):
            NotificationRequest.from_mapping({"type": "INFO"})

    def test_to_wire(self) -> None:
        wire = NotificationRequest("hi", NotificationType.WARN, NotificationChannel.PUSH, "u1").to_wire()
        assert wire == {"message": "hi", "type": "WARN", "channel": "PUSH", "userId": "u1"}


# ---------------------------------------------------------------------------
# Record / Ack / Stats
# ---------------------------------------------------------------------------


class TestNotificationRecord:
    def test_from_request_has_no_id(self) -> None:
        record = NotificationRecord.from_request(NotificationRequest("hi", user_id="u1"), _TS)
        assert record.id is None
        assert record.timestamp == _TS
        assert record.user_id == "u1"

    def test_with_id_returns_copy(self) -> None:
        record = NotificationRecord.from_request(NotificationRequest("hi"), _TS)
        saved = record.with_id("abc")
        assert saved.id == "abc"
        assert record.id is None

    def test_to_dict(self) -> None:
        record = NotificationRecord("hi", NotificationType.INFO, NotificationChannel.EMAIL, None, _TS, id="1")
        assert record.to_dict() == {
            "id": "1",
            "message": "hi",
            "type": "INFO",
            "channel": "EMAIL",
            "userId": None,
            "timestamp": "2026-01-01T12:00:00+00:00",
        }


class TestNotificationAck:
    def test_to_dict_reports_queued(self) -> None:
        ack = NotificationAck("hi", NotificationType.INFO, NotificationChannel.SYSTEM, None, _TS, "m-1")
        body = ack.to_dict()
        assert body["status"] == "QUEUED"
        assert body["detail"] == "Notification queued successfully"
        assert body["queuedAt"] == "2026-01-01T12:00:00+00:00"
        assert body["id"] == "m-1"


class TestNotificationStats:
    def test_to_dict(self) -> None:
        assert NotificationStats(4, 2, 1, 1).to_dict() == {
            "totalNotifications": 4,
            "infoCount": 2,
            "warnCount": 1,
            "errorCount": 1,
        }


# ---------------------------------------------------------------------------
# NotificationSerializer
# ---------------------------------------------------------------------------


class TestNotificationSerializer:
    def test_serialize_is_utf8_json(self) -> None:
        data = NotificationSerializer().serialize(NotificationRequest("olá", user_id="u1"))
        assert json.loads(data.decode("utf-8")) == {
            "message": "olá",
            "type": "INFO",
            "channel": "SYSTEM",
            "userId": "u1",
        }

    def test_deserialize(self) -> None:
        req = NotificationSerializer().deserialize(b'{"message": "hi", "type": "WARN"}')
        assert req == NotificationRequest("hi", NotificationType.WARN)

    @pytest.mark.parametrize("data", [b"not json", b"\xff", b"[1, 2]", b'"text"'])
    def test_deserialize_malformed(self, data: bytes) -> None:
        with pytest.raises(SerializationError):
            NotificationSerializer().deserialize(data)

    def test_deserialize_invalid_request_keeps_field_errors(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            NotificationSerializer().deserialize(b'{"message": ""}')
        assert exc_info.value.detail["errors"][0]["field"] == "message"
