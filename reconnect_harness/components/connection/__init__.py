"""
Connection management components.

Handles transport tracking and the registry swept by force_disconnect.
"""

from reconnect_harness.components.connection.registry import (
    AbortableConnection,
    ConnectionRegistry,
)

__all__ = [
    "AbortableConnection",
    "ConnectionRegistry",
]
