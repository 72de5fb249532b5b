"""
Reconnection Harness Constants.

Event names and payloads shared with the reconnection clients. These are
part of the client contract and are not configurable.
"""

from enum import Enum
from typing import Final

__all__ = [
    "HarnessEvents",
    "HarnessConstants",
    "SessionState",
]


class HarnessEvents:
    """Socket.IO event names understood by the harness."""

    CONNECT: Final[str] = "connect"
    DISCONNECT: Final[str] = "disconnect"

    # Server -> client: probe confirming the session is up
    MESSAGE: Final[str] = "message"

    # Client -> server: request a transport sweep after the configured delay
    FORCE_DISCONNECT: Final[str] = "force_disconnect"


class HarnessConstants:
    """
    Operational constants.

    Values that clients depend on live here; values an operator may tune
    live in settings.
    """

    # PROBE_PAYLOAD: sent as the "message" event on every new session
    PROBE_PAYLOAD: Final[str] = "test"

    # DEFAULT_PORT: reconnection clients dial this port
    DEFAULT_PORT: Final[int] = 4206

    # DEFAULT_FORCE_DISCONNECT_DELAY_MS: time between signal and sweep
    DEFAULT_FORCE_DISCONNECT_DELAY_MS: Final[int] = 2000

    SERVICE_NAME: Final[str] = "reconnect-harness"


class SessionState(str, Enum):
    """Lifecycle of one logical Socket.IO session in the scenario."""

    ESTABLISHED = "established"
    PROBE_SENT = "probe_sent"
    WAITING_FOR_SIGNAL = "waiting_for_signal"
    DISCONNECT_ARMED = "disconnect_armed"
    TERMINATED = "terminated"
