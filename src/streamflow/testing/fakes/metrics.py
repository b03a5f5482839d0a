"""Testing fakes – FakeMetricsRegistry."""
from __future__ import annotations

from streamflow.observability.metrics.ports import Counter, Gauge, Histogram, Metrics


class _FakeCounter(Counter):
    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[float, dict[str, str] | None]] = []
        self.total: float = 0.0

    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self.calls.append((value, labels))
        self.total += value

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def total_for(self, **labels: str) -> float:
        """Sum of the calls whose labels include every given pair."""
        return sum(
            value
            for value, call_labels in self.calls
            if all((call_labels or {}).get(k) == v for k, v in labels.items())
        )


class _FakeHistogram(Histogram):
    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[float, dict[str, str] | None]] = []

    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self.calls.append((value, labels))

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def values(self) -> list[float]:
        return [v for v, _ in self.calls]


class _FakeGauge(Gauge):
    def __init__(self, name: str) -> None:
        self.name = name
        self.current: float = 0.0

    def set(self, value: float, labels: dict[str, str] | None = None) -> None:
        self.current = value

    def inc(self, amount: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self.current += amount

    def dec(self, amount: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self.current -= amount


class FakeMetricsRegistry(Metrics):
    """In-memory :class:`Metrics` double that records all instrument calls.

    Usage::

        registry = FakeMetricsRegistry()
        consumer = RetryAwareConsumer(..., metrics=NotificationMetrics(registry))
        ...
        registry.assert_counter_total(PROCESSED_TOTAL, 1)
    """

    def __init__(self) -> None:
        self._counters: dict[str, _FakeCounter] = {}
        self._histograms: dict[str, _FakeHistogram] = {}
        self._gauges: dict[str, _FakeGauge] = {}

    # ------------------------------------------------------------------
    # Metrics port
    # ------------------------------------------------------------------

    def counter(self, name: str, description: str = "", unit: str = "") -> _FakeCounter:
        if name not in self._counters:
            self._counters[name] = _FakeCounter(name)
        return self._counters[name]

    def histogram(
        self,
        name: str,
        description: str = "",
        unit: str = "ms",
        boundaries: list[float] | None = None,
    ) -> _FakeHistogram:
        if name not in self._histograms:
            self._histograms[name] = _FakeHistogram(name)
        return self._histograms[name]

    def gauge(self, name: str, description: str = "", unit: str = "") -> _FakeGauge:
        if name not in self._gauges:
            self._gauges[name] = _FakeGauge(name)
        return self._gauges[name]

    # ------------------------------------------------------------------
    # Assertion helpers
    # ------------------------------------------------------------------

    def counter_total(self, name: str) -> float:
        counter = self._counters.get(name)
        return counter.total if counter is not None else 0.0

    def histogram_values(self, name: str) -> list[float]:
        histogram = self._histograms.get(name)
        return histogram.values if histogram is not None else []

    def gauge_value(self, name: str) -> float:
        gauge = self._gauges.get(name)
        return gauge.current if gauge is not None else 0.0

    def assert_counter_total(self, name: str, total: float) -> None:
        """Assert the cumulative total for *name* counter equals *total*."""
        actual = self.counter_total(name)
        assert actual == total, f"Counter '{name}' total is {actual}, expected {total}"

    def reset(self) -> None:
        self._counters.clear()
        self._histograms.clear()
        self._gauges.clear()


__all__ = ["FakeMetricsRegistry"]
