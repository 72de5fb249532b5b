"""
Reconnection Harness Core Module.

- session/: Session controller and disconnect scheduler
"""

from reconnect_harness.core.session import DisconnectScheduler, SessionController

__all__ = [
    "DisconnectScheduler",
    "SessionController",
]
