"""
End-to-end reconnection scenario.

Runs the real uvicorn server on an ephemeral port and drives it with
python-socketio clients.
"""

import asyncio

import pytest
import pytest_asyncio
import socketio

from reconnect_harness.config.settings import Settings
from reconnect_harness.connection_manager import ConnectionManager
from reconnect_harness.server import build_server

DELAY_MS = 200
TIMEOUT = 10.0


class ScenarioClient:
    """Socket.IO client that records the probe and the disconnect."""

    def __init__(self, transports=None) -> None:
        self.sio = socketio.AsyncClient(reconnection=False)
        self.transports = transports
        self.probes: list[str] = []
        self.probe_received = asyncio.Event()
        self.disconnected = asyncio.Event()
        self.disconnect_reason = None

        self.sio.on("message", self._on_message)
        self.sio.on("disconnect", self._on_disconnect)

    async def _on_message(self, data):
        self.probes.append(data)
        self.probe_received.set()

    async def _on_disconnect(self, *args):
        self.disconnect_reason = args[0] if args else None
        self.disconnected.set()

    async def connect(self, url: str) -> None:
        await self.sio.connect(url, transports=self.transports)
        await asyncio.wait_for(self.probe_received.wait(), TIMEOUT)


@pytest_asyncio.fixture
async def running_server():
    settings = Settings(
        _env_file=None,
        host="127.0.0.1",
        port=0,
        force_disconnect_delay_ms=DELAY_MS,
        environment="test",
    )
    manager = ConnectionManager()
    server = build_server(settings, manager)
    task = asyncio.create_task(server.serve())

    loop = asyncio.get_running_loop()
    deadline = loop.time() + TIMEOUT
    while not server.started:
        if task.done() or loop.time() > deadline:
            pytest.fail("uvicorn did not start")
        await asyncio.sleep(0.02)

    port = server.servers[0].sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}", manager
    finally:
        server.should_exit = True
        await asyncio.wait_for(task, TIMEOUT)


@pytest.mark.asyncio
async def test_force_disconnect_aborts_every_client(running_server):
    url, manager = running_server
    client_a = ScenarioClient(transports=["websocket"])
    client_b = ScenarioClient(transports=["websocket"])

    try:
        await client_a.connect(url)
        await client_b.connect(url)
        assert client_a.probes == ["test"]
        assert client_b.probes == ["test"]
        assert manager.live_connections == 2

        loop = asyncio.get_running_loop()
        signalled_at = loop.time()
        await client_a.sio.emit("force_disconnect")

        await asyncio.wait_for(
            asyncio.gather(client_a.disconnected.wait(), client_b.disconnected.wait()),
            TIMEOUT,
        )
        elapsed = loop.time() - signalled_at

        assert elapsed >= DELAY_MS / 1000 - 0.01
        # Abrupt transport failure, not a Socket.IO or Engine.IO close
        assert client_a.disconnect_reason == "transport error"
        assert client_b.disconnect_reason == "transport error"
        assert manager.metrics.get_snapshot()["connections_destroyed"] >= 2
    finally:
        await client_a.sio.disconnect()
        await client_b.sio.disconnect()


@pytest.mark.asyncio
async def test_connections_stay_open_without_signal(running_server):
    url, manager = running_server
    client = ScenarioClient(transports=["websocket"])

    try:
        await client.connect(url)
        await asyncio.sleep(DELAY_MS / 1000 * 2)

        assert not client.disconnected.is_set()
        assert client.sio.connected
        assert manager.metrics.get_snapshot()["sweeps_executed"] == 0
    finally:
        await client.sio.disconnect()


async def wait_for_upgrade(client: ScenarioClient) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + TIMEOUT
    while client.sio.transport() != "websocket":
        if loop.time() > deadline:
            pytest.fail("client never upgraded to websocket")
        await asyncio.sleep(0.02)


@pytest.mark.asyncio
async def test_force_disconnect_after_polling_upgrade(running_server):
    """Clients that start on long-polling and upgrade are aborted as well."""
    url, manager = running_server
    client_a, client_b = ScenarioClient(), ScenarioClient()

    try:
        await client_a.connect(url)
        await client_b.connect(url)
        await wait_for_upgrade(client_a)
        await wait_for_upgrade(client_b)
        assert manager.live_connections >= 2

        await client_a.sio.emit("force_disconnect")

        await asyncio.wait_for(
            asyncio.gather(client_a.disconnected.wait(), client_b.disconnected.wait()),
            TIMEOUT,
        )

        assert client_a.disconnect_reason == "transport error"
        assert client_b.disconnect_reason == "transport error"
        assert manager.live_connections == 0
        assert manager.metrics.get_snapshot()["connections_destroyed"] >= 2
    finally:
        await client_a.sio.disconnect()
        await client_b.sio.disconnect()
