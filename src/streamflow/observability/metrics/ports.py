"""Observability – metric instrument ports.

Instruments are looked up by dotted name (``notifications.sent.total``);
backends translate the name to their own convention.  Labels are optional
and, per instrument, should always use the same keys.
"""
from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence

type Labels = Mapping[str, str] | None


class Counter(abc.ABC):
    """Monotonic total (messages sent, attempts failed)."""

    @abc.abstractmethod
    def add(self, value: float = 1.0, labels: Labels = None) -> None: ...


class Histogram(abc.ABC):
    """Distribution of observed values, e.g. processing time in ms."""

    @abc.abstractmethod
    def record(self, value: float, labels: Labels = None) -> None: ...


class Gauge(abc.ABC):
    """Current level that moves both ways, e.g. retries waiting on a timer."""

    @abc.abstractmethod
    def set(self, value: float, labels: Labels = None) -> None: ...

    @abc.abstractmethod
    def inc(self, amount: float = 1.0, labels: Labels = None) -> None: ...

    @abc.abstractmethod
    def dec(self, amount: float = 1.0, labels: Labels = None) -> None: ...


class Metrics(abc.ABC):
    """Port: instrument factory.  The same name always yields the same instrument."""

    @abc.abstractmethod
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter: ...

    @abc.abstractmethod
    def histogram(
        self,
        name: str,
        description: str = "",
        unit: str = "ms",
        boundaries: Sequence[float] | None = None,
    ) -> Histogram: ...

    @abc.abstractmethod
    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge: ...


__all__ = ["Counter", "Gauge", "Histogram", "Labels", "Metrics"]
