"""
Session handling: the scenario state machine and its delayed sweep.
"""

from reconnect_harness.core.session.controller import SessionController
from reconnect_harness.core.session.scheduler import DisconnectScheduler

__all__ = [
    "SessionController",
    "DisconnectScheduler",
]
