"""
Harness settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings

from reconnect_harness.components.core.constants import HarnessConstants


class Settings(BaseSettings):
    """Harness settings with defaults matching the reconnection test suite."""

    # Server
    host: str = "0.0.0.0"
    port: int = HarnessConstants.DEFAULT_PORT

    # Socket.IO mount point (no leading/trailing slash)
    socketio_path: str = "socket.io"

    # Delay between the force_disconnect signal and the transport sweep.
    # Read once at startup; not adjustable while the process runs.
    force_disconnect_delay_ms: int = HarnessConstants.DEFAULT_FORCE_DISCONNECT_DELAY_MS

    # Environment
    environment: str = "development"
    debug: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def force_disconnect_delay_seconds(self) -> float:
        """Sweep delay converted for asyncio timers."""
        return self.force_disconnect_delay_ms / 1000

    def validate_runtime(self) -> list[str]:
        """
        Validate values that would make the harness misbehave silently.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if not 0 <= self.port <= 65535:
            errors.append(f"PORT must be between 0 and 65535, got {self.port}")

        if self.force_disconnect_delay_ms < 0:
            errors.append(
                "FORCE_DISCONNECT_DELAY_MS must not be negative "
                f"(got {self.force_disconnect_delay_ms})"
            )

        if self.socketio_path != self.socketio_path.strip("/"):
            errors.append("SOCKETIO_PATH must not start or end with '/'")

        if self.environment == "production" and self.debug:
            errors.append("DEBUG must be False in production")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
