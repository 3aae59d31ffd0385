"""Relay-wide constants (defaults and WebSocket close codes)."""

DEFAULT_PORT = 3001
DEFAULT_NOTIFICATION_PATH = "/update-status"

DEFAULT_ACK_MESSAGE = "Статус успешно обновлен и разослан"
DEFAULT_LIVENESS_MESSAGE = "WebSocket сервер работает"

# RFC 6455 close codes used by the relay.
WS_CLOSE_GOING_AWAY = 1001
WS_CLOSE_POLICY_VIOLATION = 1008
WS_CLOSE_INTERNAL_ERROR = 1011
WS_CLOSE_TRY_AGAIN_LATER = 1013
