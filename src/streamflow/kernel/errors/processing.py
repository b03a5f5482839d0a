"""Processing errors raised on the consumer path."""

from __future__ import annotations

from typing import Any

from streamflow.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ProcessingError(ApplicationError):
    """A message could not be processed."""

    default_code = "processing_error"


class TransientProcessingError(ProcessingError):
    """A single processing attempt failed; the message may be retried."""

    default_code = "transient_processing_error"

    def __init__(self, message: str, *, attempt: int | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.attempt = attempt


class ExhaustionFailure(ProcessingError):
    """The retry budget of a message is spent; it goes to the dead-letter topic."""

    default_code = "retries_exhausted"

    def __init__(
        self,
        message_id: str,
        attempts: int,
        *,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        reason = reason or "unknown failure"
        super().__init__(
            f"Message '{message_id}' exhausted after {attempts} attempt(s): {reason}",
            detail={"message_id": message_id, "attempts": attempts},
            **kwargs,
        )
        self.message_id = message_id
        self.attempts = attempts
        self.reason = reason


__all__ = [
    "ApplicationError",
    "ExhaustionFailure",
    "ProcessingError",
    "TransientProcessingError",
]
