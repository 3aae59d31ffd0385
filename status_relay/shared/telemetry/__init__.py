"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from status_relay.shared.telemetry.logging import get_logger, setup_logging
from status_relay.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
    setup_from_settings,
    shutdown_telemetry,
)
from status_relay.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "setup_from_settings",
    "shutdown_telemetry",
    "TracedOperation",
    "add_span_attributes",
    "set_span_error",
]
