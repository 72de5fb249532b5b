"""
Reconnection test harness.

Socket.IO server that probes every new session and, on request, aborts all
transport connections after a fixed delay so clients must reconnect.
"""

__version__ = "0.1.0"
