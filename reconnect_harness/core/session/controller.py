"""
Session Controller.

Drives the reconnection scenario for every Socket.IO session:
- sends the "test" probe as soon as the session is up
- on "force_disconnect", arms a sweep that aborts every live transport
  after the configured delay

The sweep is global. Any session can trigger it and it tears down every
transport in the registry, not just the triggering one.
"""

from __future__ import annotations

from collections import Counter
from functools import partial
from typing import Any, TYPE_CHECKING

from reconnect_harness.components.core.constants import (
    HarnessConstants,
    HarnessEvents,
    SessionState,
)
from reconnect_harness.config.logging import get_logger

if TYPE_CHECKING:
    import socketio

    from reconnect_harness.connection_manager import ConnectionManager
    from reconnect_harness.core.session.scheduler import DisconnectScheduler

logger = get_logger(__name__)


class SessionController:
    """
    Per-session state machine plus the delayed transport sweep.

    States: ESTABLISHED -> PROBE_SENT -> WAITING_FOR_SIGNAL
            -> DISCONNECT_ARMED -> TERMINATED

    Duplicate signals: while a sweep armed by a session is pending, further
    signals from that session are ignored. Other sessions may arm their own
    sweep; a second sweep over an emptied registry is a no-op.
    """

    def __init__(
        self,
        server: "socketio.AsyncServer",
        manager: "ConnectionManager",
        scheduler: "DisconnectScheduler",
    ) -> None:
        self._sio = server
        self._manager = manager
        self._scheduler = scheduler
        self._metrics = manager.metrics
        self._sessions: dict[str, SessionState] = {}

    @property
    def active_sessions(self) -> int:
        return len(self._sessions)

    @property
    def pending_sweeps(self) -> int:
        return self._scheduler.pending_count

    def session_state(self, sid: str) -> SessionState | None:
        return self._sessions.get(sid)

    def register(self) -> None:
        """Attach the scenario handlers to the Socket.IO server."""
        self._sio.on(HarnessEvents.CONNECT, self.on_connect)
        self._sio.on(HarnessEvents.DISCONNECT, self.on_disconnect)
        self._sio.on(HarnessEvents.FORCE_DISCONNECT, self.on_force_disconnect)

    # =========================================================================
    # Socket.IO handlers
    # =========================================================================

    async def on_connect(self, sid: str, environ: Any = None, auth: Any = None) -> None:
        self._sessions[sid] = SessionState.ESTABLISHED
        self._metrics.increment_sessions_established()
        logger.info(
            "Client connected",
            sid=sid,
            live_connections=self._manager.live_connections,
        )
        await self._send_probe(sid)

    async def on_force_disconnect(self, sid: str, *args: Any) -> None:
        self._metrics.increment_force_disconnect_signals()

        if not self._scheduler.arm(sid, partial(self._sweep, sid)):
            self._metrics.increment_duplicate_signals()
            logger.info("Disconnect already scheduled, ignoring signal", sid=sid)
            return

        if sid in self._sessions:
            self._sessions[sid] = SessionState.DISCONNECT_ARMED
        logger.info(
            "Will disconnect all clients in %d ms",
            round(self._scheduler.delay * 1000),
            sid=sid,
        )

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        # A pending sweep outlives the session that armed it
        state = self._sessions.pop(sid, None)
        if state is None:
            return
        self._metrics.increment_sessions_closed()
        logger.info(
            "Client disconnected",
            sid=sid,
            reason=reason,
            last_state=state.value,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _send_probe(self, sid: str) -> None:
        """Fire-and-forget probe; no acknowledgement is awaited."""
        self._sessions[sid] = SessionState.PROBE_SENT
        try:
            await self._sio.emit(
                HarnessEvents.MESSAGE,
                HarnessConstants.PROBE_PAYLOAD,
                to=sid,
            )
        except (ConnectionError, RuntimeError, OSError) as e:
            self._metrics.increment_probes_failed()
            logger.warning("Failed to send probe", sid=sid, error=str(e))
        else:
            self._metrics.increment_probes_sent()

        if self._sessions.get(sid) is SessionState.PROBE_SENT:
            self._sessions[sid] = SessionState.WAITING_FOR_SIGNAL

    def _sweep(self, sid: str) -> None:
        destroyed = self._manager.drain_and_destroy()
        self._metrics.increment_sweeps_executed()
        if sid in self._sessions:
            self._sessions[sid] = SessionState.TERMINATED
        logger.info(
            "Forcefully disconnected clients",
            destroyed=destroyed,
            triggered_by=sid,
        )

    # =========================================================================
    # Shutdown and statistics
    # =========================================================================

    def shutdown(self) -> int:
        """Cancel pending sweeps. Returns the number cancelled."""
        cancelled = self._scheduler.cancel_all()
        if cancelled:
            self._metrics.add_sweeps_cancelled(cancelled)
            logger.info("Cancelled pending sweeps on shutdown", count=cancelled)
        return cancelled

    def get_stats(self) -> dict[str, Any]:
        """Get session statistics."""
        states = Counter(state.value for state in self._sessions.values())
        armed = sum(1 for sid in self._sessions if self._scheduler.is_armed(sid))
        return {
            "active_sessions": len(self._sessions),
            "armed_sessions": armed,
            "pending_sweeps": self._scheduler.pending_count,
            "force_disconnect_delay_ms": round(self._scheduler.delay * 1000),
            "session_states": dict(states),
        }
