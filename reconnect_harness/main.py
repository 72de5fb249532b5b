"""
Reconnection Harness application.

Socket.IO handles the scenario events; FastAPI serves health and metrics
on the same port. Everything is built by create_app() around one explicit
ConnectionManager, shared with the uvicorn protocols that feed it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import socketio
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from reconnect_harness import __version__
from reconnect_harness.components.core.constants import HarnessConstants
from reconnect_harness.components.metrics.prometheus import generate_prometheus_metrics
from reconnect_harness.config.logging import harness_logger as logger
from reconnect_harness.config.settings import Settings, get_settings
from reconnect_harness.connection_manager import ConnectionManager
from reconnect_harness.core.session import DisconnectScheduler, SessionController


def create_socketio_server() -> socketio.AsyncServer:
    """
    Build the Socket.IO server.

    always_connect sends the CONNECT packet before the connect handler runs,
    so the probe emitted from that handler reaches an established session.
    """
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*",
        always_connect=True,
        logger=False,
        engineio_logger=False,
    )


def collect_stats(manager: ConnectionManager, controller: SessionController) -> dict[str, Any]:
    """Merge connection and session statistics."""
    return {**manager.get_stats(), **controller.get_stats()}


def create_api(
    manager: ConnectionManager,
    controller: SessionController,
    settings: Settings,
) -> FastAPI:
    """Build the FastAPI app serving health and metrics."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Started",
            host=settings.host,
            port=settings.port,
            force_disconnect_delay_ms=settings.force_disconnect_delay_ms,
            env=settings.environment,
        )

        yield

        logger.info("Shutting down reconnection harness")
        controller.shutdown()

    app = FastAPI(
        title="Reconnection Harness",
        description="Forces transport-level disconnects to exercise client reconnection",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.manager = manager
    app.state.controller = controller

    @app.get("/health")
    def health_check():
        """Basic health check endpoint."""
        try:
            stats = collect_stats(manager, controller)
        except Exception as e:
            logger.warning("Failed to get stats in health check", error=str(e))
            stats = {"error": "stats_unavailable"}
        return {
            "status": "healthy",
            "service": HarnessConstants.SERVICE_NAME,
            "version": app.version,
            "environment": settings.environment,
            **stats,
        }

    @app.get("/metrics")
    def prometheus_metrics():
        """
        Prometheus-compatible metrics endpoint.

        Usage:
            curl http://localhost:4206/metrics
        """
        return PlainTextResponse(
            content=generate_prometheus_metrics(collect_stats(manager, controller)),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    return app


def create_app(
    manager: ConnectionManager | None = None,
    settings: Settings | None = None,
) -> socketio.ASGIApp:
    """
    Build the ASGI application.

    Args:
        manager: Connection manager fed by the transport protocols. A new one
                 is created when omitted, which is only useful for tests that
                 never reach the transport layer.
        settings: Harness settings; defaults to the process settings.
    """
    settings = settings if settings is not None else get_settings()
    manager = manager if manager is not None else ConnectionManager()

    sio = create_socketio_server()
    scheduler = DisconnectScheduler(delay_seconds=settings.force_disconnect_delay_seconds)
    controller = SessionController(sio, manager, scheduler)
    controller.register()

    api = create_api(manager, controller, settings)
    return socketio.ASGIApp(
        sio,
        other_asgi_app=api,
        socketio_path=settings.socketio_path,
    )
