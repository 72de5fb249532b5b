"""
Metrics and observability components.

Internal metrics collection and Prometheus exposition.
"""

from reconnect_harness.components.metrics.collector import (
    MetricsCollector,
    ConnectionMetrics,
    SessionMetrics,
    SweepMetrics,
)
from reconnect_harness.components.metrics.prometheus import (
    PrometheusFormatter,
    generate_prometheus_metrics,
)

__all__ = [
    # Metrics collector
    "MetricsCollector",
    "ConnectionMetrics",
    "SessionMetrics",
    "SweepMetrics",
    # Prometheus
    "PrometheusFormatter",
    "generate_prometheus_metrics",
]
