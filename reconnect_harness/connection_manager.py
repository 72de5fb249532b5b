"""
Transport Connection Manager.

Thin orchestrator that composes the registry and the metrics collector.
One instance is shared by the uvicorn protocols (record/forget), the
session controller (drain_and_destroy) and the HTTP endpoints (stats).
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from reconnect_harness.components.connection.registry import ConnectionRegistry
from reconnect_harness.components.metrics.collector import MetricsCollector
from reconnect_harness.config.logging import get_logger

if TYPE_CHECKING:
    from reconnect_harness.components.connection.registry import AbortableConnection

logger = get_logger(__name__)


class ConnectionManager:
    """
    Owns the set of live transport connections.

    Composes:
    - ConnectionRegistry: membership and the forced sweep
    - MetricsCollector: counters for accepted/closed/destroyed connections
    """

    def __init__(
        self,
        registry: ConnectionRegistry | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ConnectionRegistry()
        self._metrics = metrics if metrics is not None else MetricsCollector()

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    @property
    def live_connections(self) -> int:
        """Number of transports currently tracked."""
        return len(self._registry)

    # =========================================================================
    # Transport notifications
    # =========================================================================

    def record(self, connection: "AbortableConnection") -> bool:
        """Track a newly accepted transport."""
        added = self._registry.record(connection)
        if added:
            self._metrics.increment_connections_accepted()
            logger.debug("Transport accepted", live=len(self._registry))
        return added

    def forget(self, connection: "AbortableConnection") -> bool:
        """Stop tracking a transport that closed on its own."""
        removed = self._registry.forget(connection)
        if removed:
            self._metrics.increment_connections_closed()
            logger.debug("Transport closed", live=len(self._registry))
        return removed

    # =========================================================================
    # Forced sweep
    # =========================================================================

    def drain_and_destroy(self) -> int:
        """Abort every tracked transport. Returns the number aborted."""
        destroyed = self._registry.drain_and_destroy()
        self._metrics.add_connections_destroyed(destroyed)
        return destroyed

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> dict[str, Any]:
        """Get connection statistics."""
        registry_stats = self._registry.get_stats()
        return {
            "live_connections": registry_stats["tracked_connections"],
            "closing_connections": registry_stats["closing_connections"],
            "metrics": self._metrics.get_snapshot(),
        }
