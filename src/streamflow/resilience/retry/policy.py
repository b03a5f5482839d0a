"""Resilience – RetryPolicy."""
from __future__ import annotations

from streamflow.kernel.errors import SerializationError
from streamflow.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff


class RetryPolicy:
    """Attempt budget, backoff and retryability rules for one message.

    ``max_attempts`` counts every attempt including the first one, so with the
    default of 3 a message that always fails is tried three times.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: BackoffStrategy | None = None,
        retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
        non_retryable_exceptions: tuple[type[BaseException], ...] = (),
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self.retryable_exceptions = retryable_exceptions
        self.non_retryable_exceptions = non_retryable_exceptions

    @classmethod
    def default(cls, *, dead_letter_malformed: bool = False) -> "RetryPolicy":
        """3 attempts, 1s base delay doubling each time.

        With *dead_letter_malformed* a :class:`SerializationError` skips the
        remaining attempts.
        """
        non_retryable: tuple[type[BaseException], ...] = (SerializationError,) if dead_letter_malformed else ()
        return cls(non_retryable_exceptions=non_retryable)

    def is_retryable(self, exc: BaseException) -> bool:
        if isinstance(exc, self.non_retryable_exceptions):
            return False
        return isinstance(exc, self.retryable_exceptions)

    def is_exhausted(self, attempts: int) -> bool:
        return attempts >= self.max_attempts

    def should_retry(self, exc: BaseException, attempts: int) -> bool:
        """Whether another attempt follows the *attempts*-th failure."""
        return self.is_retryable(exc) and not self.is_exhausted(attempts)

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the *attempt*-th failed attempt."""
        return self.backoff.compute(attempt)

    def max_total_delay(self) -> float:
        """Upper bound of the time a message spends waiting between attempts."""
        return sum(self.delay_for(n) for n in range(1, self.max_attempts))

    def __repr__(self) -> str:
        return f"RetryPolicy(max_attempts={self.max_attempts}, backoff={type(self.backoff).__name__})"


__all__ = ["RetryPolicy"]
