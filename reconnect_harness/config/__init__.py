"""
Configuration module: settings and logging.
"""

from reconnect_harness.config.settings import Settings, get_settings, settings
from reconnect_harness.config.logging import get_logger, setup_logging

__all__ = [
    # settings
    "Settings",
    "get_settings",
    "settings",
    # logging
    "get_logger",
    "setup_logging",
]
