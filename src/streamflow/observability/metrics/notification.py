"""Observability – counters and latency distribution of the delivery pipeline."""
from __future__ import annotations

from streamflow.observability.metrics.noop import NoopMetrics
from streamflow.observability.metrics.ports import Metrics

SENT_TOTAL = "notifications.sent.total"
PROCESSED_TOTAL = "notifications.processed.total"
FAILED_TOTAL = "notifications.failed.total"
DLQ_TOTAL = "notifications.dlq.total"
PROCESSING_TIME = "notifications.processing.time"
RETRIES_PENDING = "notifications.retries.pending"


class NotificationMetrics:
    """Named instruments for intake, consumer and dead-letter router.

    ``failed`` counts failed attempts, not failed messages: a message retried
    twice before succeeding adds 2 to it.  ``processing.time`` spans the whole
    lifecycle of a message, retries and backoff included.
    """

    def __init__(self, metrics: Metrics | None = None) -> None:
        backend = metrics or NoopMetrics()
        self._sent = backend.counter(SENT_TOTAL, "Notifications published to the main topic")
        self._processed = backend.counter(PROCESSED_TOTAL, "Notifications processed successfully")
        self._failed = backend.counter(FAILED_TOTAL, "Failed processing attempts")
        self._dlq = backend.counter(DLQ_TOTAL, "Messages forwarded to the dead-letter topic")
        self._processing_time = backend.histogram(
            PROCESSING_TIME, "First attempt start to success, retries included", unit="ms"
        )
        self._retries_pending = backend.gauge(RETRIES_PENDING, "Messages waiting for a scheduled re-attempt")

    def increment_sent(self) -> None:
        self._sent.add(1)

    def increment_processed(self) -> None:
        self._processed.add(1)

    def increment_failed(self, error_type: str | None = None) -> None:
        self._failed.add(1, labels={"error_type": error_type} if error_type else None)

    def increment_dlq(self) -> None:
        self._dlq.add(1)

    def record_processing_time(self, seconds: float) -> None:
        self._processing_time.record(seconds * 1000.0)

    def retry_scheduled(self) -> None:
        self._retries_pending.inc()

    def retry_resumed(self) -> None:
        self._retries_pending.dec()

    def retries_dropped(self, count: int) -> None:
        """Waiting retries abandoned by a scheduler shutdown."""
        self._retries_pending.dec(count)


__all__ = [
    "DLQ_TOTAL",
    "FAILED_TOTAL",
    "NotificationMetrics",
    "PROCESSED_TOTAL",
    "PROCESSING_TIME",
    "RETRIES_PENDING",
    "SENT_TOTAL",
]
