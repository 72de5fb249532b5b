"""
Process entry point.

Binds uvicorn with protocol classes that report every accepted transport to
the ConnectionManager, then serves the harness application.
"""

from __future__ import annotations

import uvicorn

from reconnect_harness.components.connection.transport import build_protocol_factories
from reconnect_harness.config.logging import harness_logger as logger, setup_logging
from reconnect_harness.config.settings import Settings, get_settings
from reconnect_harness.connection_manager import ConnectionManager
from reconnect_harness.main import create_app


def build_server(
    settings: Settings | None = None,
    manager: ConnectionManager | None = None,
) -> uvicorn.Server:
    """
    Build a uvicorn server wired to a ConnectionManager.

    log_config=None keeps uvicorn from replacing the harness logging setup.
    """
    settings = settings if settings is not None else get_settings()
    manager = manager if manager is not None else ConnectionManager()

    http_protocol, ws_protocol = build_protocol_factories(manager)
    config = uvicorn.Config(
        create_app(manager, settings),
        host=settings.host,
        port=settings.port,
        http=http_protocol,
        ws=ws_protocol,
        lifespan="on",
        log_config=None,
        access_log=False,
    )
    return uvicorn.Server(config)


def run() -> None:
    """Start the harness and block until it exits."""
    setup_logging()
    settings = get_settings()

    errors = settings.validate_runtime()
    if errors:
        for error in errors:
            logger.critical("Invalid configuration", error=error)
        raise SystemExit(1)

    build_server(settings).run()


if __name__ == "__main__":
    run()
