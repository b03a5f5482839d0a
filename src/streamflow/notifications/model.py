"""Notifications – request, record, acknowledgement and stats value objects."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from streamflow.kernel.errors import ValidationError


class NotificationType(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value: Any, *, default: "NotificationType | None" = None) -> "NotificationType":
        return _parse_enum(cls, "type", value, default or cls.INFO)


class NotificationChannel(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    PUSH = "PUSH"
    SYSTEM = "SYSTEM"

    @classmethod
    def parse(cls, value: Any, *, default: "NotificationChannel | None" = None) -> "NotificationChannel":
        return _parse_enum(cls, "channel", value, default or cls.SYSTEM)


def _parse_enum(enum_cls: Any, field: str, value: Any, default: Any) -> Any:
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError.for_field(field, f"must be one of {allowed}", value) from None


@dataclasses.dataclass(frozen=True)
class NotificationRequest:
    """What a caller asks to deliver."""

    message: str
    type: NotificationType = NotificationType.INFO
    channel: NotificationChannel = NotificationChannel.SYSTEM
    user_id: str | None = None

    def validate(self) -> "NotificationRequest":
        """Raise :class:`ValidationError` unless the request may be queued."""
        if not isinstance(self.message, str) or not self.message.strip():
            raise ValidationError.for_field("message", "must not be blank")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NotificationRequest":
        """Build a validated request from loose input.

        Accepts ``userId`` or ``user_id``; enum values are case-insensitive and
        fall back to their defaults when absent.
        """
        errors: list[dict[str, Any]] = []
        message = data.get("message")
        if not isinstance(message, str) or not message.strip():
            errors.append({"field": "message", "message": "must not be blank"})
        parsed: dict[str, Any] = {}
        for field, parser in (("type", NotificationType.parse), ("channel", NotificationChannel.parse)):
            try:
                parsed[field] = parser(data.get(field))
            except ValidationError as exc:
                errors.extend(exc.errors)
        user_id = data.get("userId", data.get("user_id"))
        if user_id is not None and not isinstance(user_id, str):
            user_id = str(user_id)
        if errors:
            raise ValidationError("Invalid notification request", errors=errors)
        return cls(message=message, user_id=user_id or None, **parsed)  # type: ignore[arg-type]

    def to_wire(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": self.type.value,
            "channel": self.channel.value,
            "userId": self.user_id,
        }


@dataclasses.dataclass(frozen=True)
class NotificationRecord:
    """A successfully processed notification as kept in the store.

    ``id`` is ``None`` until the store assigns one on save.
    """

    message: str
    type: NotificationType
    channel: NotificationChannel
    user_id: str | None
    timestamp: datetime
    id: str | None = None

    @classmethod
    def from_request(cls, request: NotificationRequest, timestamp: datetime) -> "NotificationRecord":
        return cls(
            message=request.message,
            type=request.type,
            channel=request.channel,
            user_id=request.user_id,
            timestamp=timestamp,
        )

    def with_id(self, record_id: str) -> "NotificationRecord":
        return dataclasses.replace(self, id=record_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "type": self.type.value,
            "channel": self.channel.value,
            "userId": self.user_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclasses.dataclass(frozen=True)
class NotificationAck:
    """Returned by intake once a request is on the queue."""

    message: str
    type: NotificationType
    channel: NotificationChannel
    user_id: str | None
    queued_at: datetime
    message_id: str
    status: str = "QUEUED"
    detail: str = "Notification queued successfully"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.message_id,
            "status": self.status,
            "message": self.message,
            "type": self.type.value,
            "channel": self.channel.value,
            "userId": self.user_id,
            "detail": self.detail,
            "queuedAt": self.queued_at.isoformat(),
        }


@dataclasses.dataclass(frozen=True)
class NotificationStats:
    total: int
    info_count: int
    warn_count: int
    error_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "totalNotifications": self.total,
            "infoCount": self.info_count,
            "warnCount": self.warn_count,
            "errorCount": self.error_count,
        }


__all__ = [
    "NotificationAck",
    "NotificationChannel",
    "NotificationRecord",
    "NotificationRequest",
    "NotificationStats",
    "NotificationType",
]
