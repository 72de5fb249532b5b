"""
Core components: constants shared across the harness.
"""

from reconnect_harness.components.core.constants import (
    HarnessConstants,
    HarnessEvents,
    SessionState,
)

__all__ = [
    "HarnessConstants",
    "HarnessEvents",
    "SessionState",
]
