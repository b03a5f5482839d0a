"""Prometheus adapter – metrics backend."""
from streamflow.adapters.prometheus.metrics import MS_BUCKETS, PrometheusMetrics, metric_name

__all__ = ["MS_BUCKETS", "PrometheusMetrics", "metric_name"]
