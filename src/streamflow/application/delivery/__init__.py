"""Application delivery – intake, retry-aware consumer and dead-letter routing."""
from streamflow.application.delivery.consumer import NotificationHandler, RetryAwareConsumer
from streamflow.application.delivery.dead_letter import (
    FAILURE_REASON_HEADER,
    UNREADABLE_REASON,
    DeadLetterRouter,
    DeadLetterSink,
)
from streamflow.application.delivery.intake import NotificationIntake
from streamflow.application.delivery.lifecycle import MessageLifecycle, ProcessingState
from streamflow.application.delivery.recorder import NotificationRecorder

__all__ = [
    "FAILURE_REASON_HEADER",
    "UNREADABLE_REASON",
    "DeadLetterRouter",
    "DeadLetterSink",
    "MessageLifecycle",
    "NotificationHandler",
    "NotificationIntake",
    "NotificationRecorder",
    "ProcessingState",
    "RetryAwareConsumer",
]
