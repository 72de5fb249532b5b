"""
Prometheus Metrics Export for the reconnection harness.

Formats internal metrics in Prometheus exposition format.
No external dependencies required.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MetricType(str, Enum):
    """Prometheus metric types."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDefinition:
    """Definition of a metric for Prometheus output."""

    name: str
    source_key: str
    help_text: str
    metric_type: MetricType


# Gauges read from the top level of the stats dict
GAUGE_DEFINITIONS: list[MetricDefinition] = [
    MetricDefinition(
        name="connections_live",
        source_key="live_connections",
        help_text="Transport connections currently tracked by the registry",
        metric_type=MetricType.GAUGE,
    ),
    MetricDefinition(
        name="sessions_active",
        source_key="active_sessions",
        help_text="Socket.IO sessions currently open",
        metric_type=MetricType.GAUGE,
    ),
    MetricDefinition(
        name="sweeps_pending",
        source_key="pending_sweeps",
        help_text="Force-disconnect sweeps armed and waiting to fire",
        metric_type=MetricType.GAUGE,
    ),
    MetricDefinition(
        name="force_disconnect_delay_ms",
        source_key="force_disconnect_delay_ms",
        help_text="Delay between a force_disconnect signal and its sweep",
        metric_type=MetricType.GAUGE,
    ),
]

# Counters read from stats["metrics"]
COUNTER_DEFINITIONS: list[MetricDefinition] = [
    MetricDefinition(
        name="connections_accepted_total",
        source_key="connections_accepted",
        help_text="Transport connections accepted",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="connections_closed_total",
        source_key="connections_closed",
        help_text="Transport connections closed by the peer or the server",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="connections_destroyed_total",
        source_key="connections_destroyed",
        help_text="Transport connections aborted by a sweep",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="sessions_established_total",
        source_key="sessions_established",
        help_text="Socket.IO sessions established",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="probes_sent_total",
        source_key="probes_sent",
        help_text="Probe messages sent",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="probes_failed_total",
        source_key="probes_failed",
        help_text="Probe messages that could not be sent",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="force_disconnect_signals_total",
        source_key="force_disconnect_signals",
        help_text="force_disconnect events received",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="force_disconnect_duplicates_total",
        source_key="force_disconnect_duplicates",
        help_text="force_disconnect events ignored because a sweep was pending",
        metric_type=MetricType.COUNTER,
    ),
    MetricDefinition(
        name="sweeps_executed_total",
        source_key="sweeps_executed",
        help_text="Sweeps that fired",
        metric_type=MetricType.COUNTER,
    ),
]


class PrometheusFormatter:
    """
    Formats metrics in Prometheus text exposition format.

    Reference: https://prometheus.io/docs/instrumenting/exposition_formats/

    Usage:
        formatter = PrometheusFormatter()
        output = formatter.format_all_metrics(stats)
    """

    def __init__(self, prefix: str = "reconnect_harness"):
        self._prefix = prefix

    def format_metric(
        self,
        name: str,
        value: float | int,
        help_text: str,
        metric_type: MetricType,
    ) -> str:
        """Format a single metric with its HELP and TYPE lines."""
        full_name = f"{self._prefix}_{name}"
        return "\n".join([
            f"# HELP {full_name} {help_text}",
            f"# TYPE {full_name} {metric_type.value}",
            f"{full_name} {value}",
        ])

    def format_all_metrics(self, stats: dict[str, Any]) -> str:
        """
        Format all metrics from the harness stats.

        Args:
            stats: Merged stats from ConnectionManager and SessionController.

        Returns:
            Complete Prometheus exposition format string.
        """
        counters = stats.get("metrics", {})
        lines = [
            self.format_metric(d.name, stats.get(d.source_key, 0), d.help_text, d.metric_type)
            for d in GAUGE_DEFINITIONS
        ]
        lines.extend(
            self.format_metric(d.name, counters.get(d.source_key, 0), d.help_text, d.metric_type)
            for d in COUNTER_DEFINITIONS
        )
        lines.append(self.format_metric(
            "scrape_timestamp",
            int(time.time()),
            "Timestamp of metrics scrape",
            MetricType.GAUGE,
        ))
        return "\n".join(lines) + "\n"


def generate_prometheus_metrics(stats: dict[str, Any]) -> str:
    """Render harness stats in Prometheus exposition format."""
    return PrometheusFormatter().format_all_metrics(stats)
