"""Prometheus adapter – PrometheusMetrics."""
from __future__ import annotations

import re
from typing import Any

from streamflow.observability.metrics.ports import Counter, Gauge, Histogram, Metrics


def _require_prometheus() -> Any:
    try:
        import prometheus_client  # type: ignore[import-untyped]
        return prometheus_client
    except ImportError as exc:
        raise ImportError("Install 'streamflow[prometheus]' to use the Prometheus adapter") from exc


_INVALID = re.compile(r"[^a-zA-Z0-9_:]")

MS_BUCKETS = (5.0, 10.0, 25.0, 50.0, 100.0, 250.0, 500.0, 1000.0, 2500.0, 5000.0, 10000.0, 30000.0, 60000.0)


def metric_name(name: str) -> str:
    """``notifications.sent.total`` -> ``notifications_sent_total``."""
    return _INVALID.sub("_", name)


class _Instrument:
    """Creates the collector on first use with the label names of that call.

    Later calls fill missing labels with ``""`` and drop unknown ones, since a
    Prometheus collector has a fixed label set.
    """

    def __init__(self, factory: Any) -> None:
        self._factory = factory
        self._collector: Any = None
        self._label_names: tuple[str, ...] = ()

    def _child(self, labels: dict[str, str] | None) -> Any:
        if self._collector is None:
            self._label_names = tuple(sorted(labels or {}))
            self._collector = self._factory(self._label_names)
        if not self._label_names:
            return self._collector
        values = labels or {}
        return self._collector.labels(**{k: values.get(k, "") for k in self._label_names})


class _PrometheusCounter(Counter, _Instrument):
    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._child(labels).inc(value)


class _PrometheusHistogram(Histogram, _Instrument):
    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self._child(labels).observe(value)


class _PrometheusGauge(Gauge, _Instrument):
    def set(self, value: float, labels: dict[str, str] | None = None) -> None:
        self._child(labels).set(value)

    def inc(self, amount: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._child(labels).inc(amount)

    def dec(self, amount: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._child(labels).dec(amount)


class PrometheusMetrics(Metrics):
    """``Metrics`` port over prometheus-client.

    Dotted names are turned into Prometheus names (``.`` -> ``_``).  Pass a
    private ``CollectorRegistry`` to keep tests isolated from the global one.
    """

    def __init__(self, registry: Any = None) -> None:
        self._prom = _require_prometheus()
        self._registry = registry if registry is not None else self._prom.REGISTRY
        self._instruments: dict[str, Any] = {}

    @property
    def registry(self) -> Any:
        return self._registry

    def _get(self, name: str, build: Any) -> Any:
        if name not in self._instruments:
            self._instruments[name] = build()
        return self._instruments[name]

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        prom_name = metric_name(name)
        return self._get(
            name,
            lambda: _PrometheusCounter(
                lambda labels: self._prom.Counter(
                    prom_name, description or name, labels, unit=unit, registry=self._registry
                )
            ),
        )

    def histogram(self, name: str, description: str = "", unit: str = "ms", boundaries: list[float] | None = None) -> Histogram:
        prom_name = metric_name(name)
        buckets = tuple(boundaries) if boundaries else MS_BUCKETS
        return self._get(
            name,
            lambda: _PrometheusHistogram(
                lambda labels: self._prom.Histogram(
                    prom_name, description or name, labels, unit=unit, buckets=buckets, registry=self._registry
                )
            ),
        )

    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge:
        prom_name = metric_name(name)
        return self._get(
            name,
            lambda: _PrometheusGauge(
                lambda labels: self._prom.Gauge(
                    prom_name, description or name, labels, unit=unit, registry=self._registry
                )
            ),
        )

    def exposition(self) -> bytes:
        """Text exposition format of the registry."""
        return self._prom.generate_latest(self._registry)


__all__ = ["MS_BUCKETS", "PrometheusMetrics", "metric_name"]
