"""
Pytest configuration and fixtures for harness tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from reconnect_harness.components.connection.registry import ConnectionRegistry
from reconnect_harness.connection_manager import ConnectionManager
from reconnect_harness.core.session import DisconnectScheduler, SessionController

# Short delay so scenario tests finish quickly
TEST_DELAY_SECONDS = 0.05


class FakeTransport:
    """Stands in for an asyncio transport: records aborts, nothing else."""

    def __init__(self, name: str = "transport", fail_on_abort: bool = False):
        self.name = name
        self.fail_on_abort = fail_on_abort
        self.abort_calls = 0

    def abort(self) -> None:
        self.abort_calls += 1
        if self.fail_on_abort:
            raise OSError("Bad file descriptor")

    def is_closing(self) -> bool:
        return self.abort_calls > 0

    def __repr__(self) -> str:
        return f"FakeTransport({self.name!r})"


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def manager():
    return ConnectionManager()


@pytest.fixture
def scheduler():
    return DisconnectScheduler(delay_seconds=TEST_DELAY_SECONDS)


@pytest.fixture
def sio():
    """Socket.IO server double: emit is awaited, on() is recorded."""
    server = MagicMock()
    server.emit = AsyncMock()
    return server


@pytest.fixture
def controller(sio, manager, scheduler):
    return SessionController(sio, manager, scheduler)
