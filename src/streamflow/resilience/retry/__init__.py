"""Resilience – retry budget, exponential backoff and timer-driven re-attempts."""
from streamflow.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from streamflow.resilience.retry.policy import RetryPolicy
from streamflow.resilience.retry.scheduler import AsyncioRetryScheduler, RetryCallback, RetryScheduler

__all__ = [
    "AsyncioRetryScheduler",
    "BackoffStrategy",
    "ExponentialBackoff",
    "RetryCallback",
    "RetryPolicy",
    "RetryScheduler",
]
