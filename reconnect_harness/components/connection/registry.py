"""
Connection Registry for the reconnection harness.

Tracks every live transport-level connection (the raw TCP transport under a
Socket.IO session) so they can all be aborted at once.

Membership changes and the snapshot taken by drain_and_destroy() are guarded
by a threading.Lock. The lock is never held while aborting transports.
"""

from __future__ import annotations

import threading
from typing import Protocol

from reconnect_harness.config.logging import get_logger

logger = get_logger(__name__)


class AbortableConnection(Protocol):
    """Anything that can be torn down abruptly (asyncio.Transport fits)."""

    def abort(self) -> None: ...

    def is_closing(self) -> bool: ...


class ConnectionRegistry:
    """
    Set of live connection handles, unique by identity.

    The registry only holds membership. The transport layer owns the
    underlying resource and reports natural closure through forget().

    Usage:
        registry = ConnectionRegistry()
        registry.record(transport)
        registry.forget(transport)
        destroyed = registry.drain_and_destroy()
    """

    def __init__(self) -> None:
        self._connections: set[AbortableConnection] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, handle: object) -> bool:
        with self._lock:
            return handle in self._connections

    def record(self, handle: AbortableConnection) -> bool:
        """
        Start tracking a connection.

        Returns:
            True if the handle was added, False if it was already tracked.
        """
        with self._lock:
            if handle in self._connections:
                return False
            self._connections.add(handle)
            return True

    def forget(self, handle: AbortableConnection) -> bool:
        """
        Stop tracking a connection. Forgetting a non-member is a no-op.

        Returns:
            True if the handle was removed, False if it was not tracked.
        """
        with self._lock:
            if handle not in self._connections:
                return False
            self._connections.discard(handle)
            return True

    def snapshot(self) -> list[AbortableConnection]:
        """Copy of current members."""
        with self._lock:
            return list(self._connections)

    def drain_and_destroy(self) -> int:
        """
        Remove every tracked connection and abort it.

        The snapshot-and-clear step is atomic with respect to record() and
        forget(). Connections recorded while the aborts run are left for the
        next drain.

        Returns:
            Number of connections aborted.
        """
        with self._lock:
            drained = list(self._connections)
            self._connections.clear()

        destroyed = 0
        for handle in drained:
            try:
                handle.abort()
            except Exception as e:
                # Already-dead transports may complain; the handle is gone either way
                logger.debug("Abort on dead connection ignored: %s", str(e))
            destroyed += 1

        return destroyed

    def get_stats(self) -> dict[str, int]:
        """Get registry statistics."""
        members = self.snapshot()
        closing = sum(1 for handle in members if handle.is_closing())
        return {
            "tracked_connections": len(members),
            "closing_connections": closing,
        }

