"""
Metrics Collector for the reconnection harness.

Centralizes counters for observability.
Thread-safe counter operations for concurrent access.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any


@dataclass
class ConnectionMetrics:
    """Metrics for transport-level connections."""
    accepted: int = 0
    closed: int = 0
    destroyed: int = 0


@dataclass
class SessionMetrics:
    """Metrics for Socket.IO sessions."""
    established: int = 0
    closed: int = 0
    probes_sent: int = 0
    probes_failed: int = 0


@dataclass
class SweepMetrics:
    """Metrics for force-disconnect signals and the sweeps they trigger."""
    signals: int = 0
    duplicate_signals: int = 0
    executed: int = 0
    cancelled: int = 0


class MetricsCollector:
    """
    Thread-safe metrics collector for the harness.

    Every caller runs on the event loop without awaiting, so plain methods
    guarded by a threading.Lock are enough.

    Usage:
        metrics = MetricsCollector()
        metrics.increment_connections_accepted()
        stats = metrics.get_snapshot()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connection = ConnectionMetrics()
        self._session = SessionMetrics()
        self._sweep = SweepMetrics()

    # ==========================================================================
    # Connection Metrics
    # ==========================================================================

    def increment_connections_accepted(self) -> None:
        with self._lock:
            self._connection.accepted += 1

    def increment_connections_closed(self) -> None:
        with self._lock:
            self._connection.closed += 1

    def add_connections_destroyed(self, count: int) -> None:
        """Add count of connections aborted by a sweep."""
        with self._lock:
            self._connection.destroyed += count

    # ==========================================================================
    # Session Metrics
    # ==========================================================================

    def increment_sessions_established(self) -> None:
        with self._lock:
            self._session.established += 1

    def increment_sessions_closed(self) -> None:
        with self._lock:
            self._session.closed += 1

    def increment_probes_sent(self) -> None:
        with self._lock:
            self._session.probes_sent += 1

    def increment_probes_failed(self) -> None:
        with self._lock:
            self._session.probes_failed += 1

    # ==========================================================================
    # Sweep Metrics
    # ==========================================================================

    def increment_force_disconnect_signals(self) -> None:
        with self._lock:
            self._sweep.signals += 1

    def increment_duplicate_signals(self) -> None:
        with self._lock:
            self._sweep.duplicate_signals += 1

    def increment_sweeps_executed(self) -> None:
        with self._lock:
            self._sweep.executed += 1

    def add_sweeps_cancelled(self, count: int) -> None:
        with self._lock:
            self._sweep.cancelled += count

    # ==========================================================================
    # Snapshot
    # ==========================================================================

    def get_snapshot(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics.

        Metric names follow the pattern {category}_{metric}.
        """
        with self._lock:
            return {
                # Connection metrics
                "connections_accepted": self._connection.accepted,
                "connections_closed": self._connection.closed,
                "connections_destroyed": self._connection.destroyed,
                # Session metrics
                "sessions_established": self._session.established,
                "sessions_closed": self._session.closed,
                "probes_sent": self._session.probes_sent,
                "probes_failed": self._session.probes_failed,
                # Sweep metrics
                "force_disconnect_signals": self._sweep.signals,
                "force_disconnect_duplicates": self._sweep.duplicate_signals,
                "sweeps_executed": self._sweep.executed,
                "sweeps_cancelled": self._sweep.cancelled,
            }
