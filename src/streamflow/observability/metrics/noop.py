"""Observability – NoopMetrics."""
from __future__ import annotations

from collections.abc import Sequence

from streamflow.observability.metrics.ports import Counter, Gauge, Histogram, Labels, Metrics


class _Discard(Counter, Histogram, Gauge):
    """One instrument of every kind that drops what it is given."""

    def add(self, value: float = 1.0, labels: Labels = None) -> None:
        return None

    def record(self, value: float, labels: Labels = None) -> None:
        return None

    def set(self, value: float, labels: Labels = None) -> None:
        return None

    def inc(self, amount: float = 1.0, labels: Labels = None) -> None:
        return None

    def dec(self, amount: float = 1.0, labels: Labels = None) -> None:
        return None


_DISCARD = _Discard()


class NoopMetrics(Metrics):
    """Default backend when none is configured; every name maps to one shared sink."""

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return _DISCARD

    def histogram(
        self,
        name: str,
        description: str = "",
        unit: str = "ms",
        boundaries: Sequence[float] | None = None,
    ) -> Histogram:
        return _DISCARD

    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge:
        return _DISCARD


__all__ = ["NoopMetrics"]
