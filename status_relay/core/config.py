"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Both the relay and the ingestion service read from
the same Settings; each uses only the fields it needs.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from status_relay.core.constants import (
    DEFAULT_ACK_MESSAGE,
    DEFAULT_LIVENESS_MESSAGE,
    DEFAULT_NOTIFICATION_PATH,
    DEFAULT_PORT,
)


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Every field has a default; validate_limits_and_paths rejects values
    that would leave the relay unusable.
    """

    # App
    app_name: str = "status-relay"
    app_version: str = "1.0.0"
    debug: bool = False

    # Listener (one port for HTTP notifications and WebSocket upgrades)
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Notification endpoint
    notification_path: str = DEFAULT_NOTIFICATION_PATH
    ack_message: str = DEFAULT_ACK_MESSAGE
    liveness_message: str = DEFAULT_LIVENESS_MESSAGE
    max_notification_bytes: int = 1024 * 1024  # 1MB

    # WebSocket subscribers
    ws_path: str = "/"
    ws_send_timeout_seconds: float = 5.0
    ws_max_subscribers: int = 0  # 0 = unlimited
    # Comma-separated browser origins allowed to subscribe; empty = any origin.
    ws_allowed_origins: str = ""

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # Ingestion service -> relay
    relay_notify_url: str = f"http://localhost:{DEFAULT_PORT}{DEFAULT_NOTIFICATION_PATH}"
    relay_notify_timeout_seconds: float = 5.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits_and_paths(self) -> "Settings":
        """Validate limits and route paths.

        - Size and timeout limits must be positive; subscriber cap must be >= 0.
        - Paths must be absolute; the notification path is neither the root nor the
          WebSocket path.
        """
        if self.max_notification_bytes <= 0:
            raise ValueError("MAX_NOTIFICATION_BYTES must be a positive integer.")
        if self.ws_send_timeout_seconds <= 0:
            raise ValueError("WS_SEND_TIMEOUT_SECONDS must be positive.")
        if self.relay_notify_timeout_seconds <= 0:
            raise ValueError("RELAY_NOTIFY_TIMEOUT_SECONDS must be positive.")
        if self.ws_max_subscribers < 0:
            raise ValueError("WS_MAX_SUBSCRIBERS must be 0 (unlimited) or greater.")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0.")
        for name in ("notification_path", "ws_path"):
            value = getattr(self, name)
            if not value.startswith("/"):
                raise ValueError(f"{name.upper()} must start with '/', got: {value!r}")
        if self.notification_path == "/":
            raise ValueError("NOTIFICATION_PATH cannot be the root path.")
        if self.notification_path == self.ws_path:
            raise ValueError("NOTIFICATION_PATH and WS_PATH must differ.")
        return self

    def ws_allowed_origin_list(self) -> list[str]:
        """Return the parsed WebSocket origin allowlist (empty = any)."""
        return [o.strip() for o in self.ws_allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
