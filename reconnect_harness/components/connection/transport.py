"""
Transport tracking for uvicorn protocols.

uvicorn creates one protocol instance per accepted TCP connection and hands
the same asyncio transport to a fresh WebSocket protocol on upgrade. The
mixin below reports the transport to a tracker when the connection is made
and again when it is lost, so the registry always reflects live sockets.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Callable, Protocol

from uvicorn.protocols.http.h11_impl import H11Protocol
from uvicorn.protocols.websockets.wsproto_impl import WSProtocol


class ConnectionTracker(Protocol):
    """Receiver of transport open/close notifications."""

    def record(self, transport: asyncio.BaseTransport) -> bool: ...

    def forget(self, transport: asyncio.BaseTransport) -> bool: ...


class TrackedConnectionMixin:
    """
    Reports connection_made/connection_lost to a ConnectionTracker.

    Must come before the uvicorn protocol class in the MRO. The tracker is
    passed as a keyword argument; every other argument goes to uvicorn.
    """

    def __init__(self, *args: Any, tracker: ConnectionTracker, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._tracker = tracker
        self._tracked_transport: asyncio.BaseTransport | None = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self._tracked_transport = transport
        self._tracker.record(transport)
        super().connection_made(transport)  # type: ignore[misc]

    def connection_lost(self, exc: Exception | None) -> None:
        if self._tracked_transport is not None:
            self._tracker.forget(self._tracked_transport)
        super().connection_lost(exc)  # type: ignore[misc]


class TrackedH11Protocol(TrackedConnectionMixin, H11Protocol):
    """HTTP/1.1 protocol (Engine.IO polling and the upgrade handshake)."""


class TrackedWSProtocol(TrackedConnectionMixin, WSProtocol):
    """WebSocket protocol taking over the transport after an upgrade."""


def build_protocol_factories(
    tracker: ConnectionTracker,
) -> tuple[Callable[..., asyncio.Protocol], Callable[..., asyncio.Protocol]]:
    """
    Build (http, ws) protocol factories for uvicorn.Config.

    Returns:
        Factories accepting uvicorn's constructor arguments, with the
        tracker bound.
    """
    return (
        partial(TrackedH11Protocol, tracker=tracker),
        partial(TrackedWSProtocol, tracker=tracker),
    )
