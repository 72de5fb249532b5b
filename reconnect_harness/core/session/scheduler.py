"""
Disconnect Scheduler.

One-shot delayed actions on the running event loop, keyed by session id.
Uses loop.call_later so nothing ever sleeps on the loop.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Hashable

from reconnect_harness.config.logging import get_logger

logger = get_logger(__name__)


class DisconnectScheduler:
    """
    Keeps at most one pending timer per key.

    Arming a key that already has a pending timer is a no-op; the existing
    deadline is kept. A timer is removed from the pending set before its
    action runs, so the action may arm the same key again.
    """

    def __init__(self, delay_seconds: float) -> None:
        """
        Initialize scheduler.

        Args:
            delay_seconds: Time between arm() and the action firing.
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must not be negative, got {delay_seconds}")
        self._delay = delay_seconds
        self._pending: dict[Hashable, asyncio.TimerHandle] = {}

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_armed(self, key: Hashable) -> bool:
        return key in self._pending

    def arm(self, key: Hashable, action: Callable[[], None]) -> bool:
        """
        Schedule action to run after the delay.

        Must be called from a coroutine or callback on the event loop.

        Returns:
            True if a timer was created, False if one was already pending.
        """
        if key in self._pending:
            return False

        loop = asyncio.get_running_loop()
        self._pending[key] = loop.call_later(self._delay, self._fire, key, action)
        return True

    def _fire(self, key: Hashable, action: Callable[[], None]) -> None:
        self._pending.pop(key, None)
        try:
            action()
        except Exception:
            logger.error("Scheduled disconnect action failed", key=key, exc_info=True)

    def cancel_all(self) -> int:
        """
        Cancel every pending timer. Only used on process shutdown.

        Returns:
            Number of timers cancelled.
        """
        handles = list(self._pending.values())
        self._pending.clear()
        for handle in handles:
            handle.cancel()
        return len(handles)
