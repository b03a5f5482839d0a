"""Resilience – backoff strategies."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute wait duration (seconds) after the *attempt*-th failure."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ExponentialBackoff(BackoffStrategy):
    """Delay grows exponentially: ``base_delay * multiplier^(attempt - 1)``.

    With the defaults the first retry waits 1s, the second 2s, the third 4s,
    never more than *max_delay*.
    """

    def __init__(self, base_delay: float = 1.0, multiplier: float = 2.0, max_delay: float = 30.0) -> None:
        if base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if multiplier < 1:
            raise ValueError("multiplier must be >= 1")
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def compute(self, attempt: int) -> float:
        if attempt < 1:
            raise ValueError("attempt is 1-based")
        return min(self.base_delay * (self.multiplier ** (attempt - 1)), self.max_delay)


__all__ = ["BackoffStrategy", "ExponentialBackoff"]
