"""Notifications – domain value objects, ports and wire codec."""
from streamflow.notifications.model import (
    NotificationAck,
    NotificationChannel,
    NotificationRecord,
    NotificationRequest,
    NotificationStats,
    NotificationType,
)
from streamflow.notifications.ports import NotificationStore, RecentCache
from streamflow.notifications.serializer import NotificationSerializer

__all__ = [
    "NotificationAck",
    "NotificationChannel",
    "NotificationRecord",
    "NotificationRequest",
    "NotificationSerializer",
    "NotificationStats",
    "NotificationStore",
    "NotificationType",
    "RecentCache",
]
