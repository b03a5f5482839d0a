"""Observability – metrics ports and the pipeline's named instruments."""
from streamflow.observability.metrics.ports import Counter, Gauge, Histogram, Labels, Metrics
from streamflow.observability.metrics.noop import NoopMetrics
from streamflow.observability.metrics.notification import (
    DLQ_TOTAL,
    FAILED_TOTAL,
    PROCESSED_TOTAL,
    PROCESSING_TIME,
    RETRIES_PENDING,
    SENT_TOTAL,
    NotificationMetrics,
)

__all__ = [
    "Counter",
    "DLQ_TOTAL",
    "FAILED_TOTAL",
    "Gauge",
    "Histogram",
    "Labels",
    "Metrics",
    "NoopMetrics",
    "NotificationMetrics",
    "PROCESSED_TOTAL",
    "PROCESSING_TIME",
    "RETRIES_PENDING",
    "SENT_TOTAL",
]
