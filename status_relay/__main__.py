"""Run the relay: python -m status_relay (one port for HTTP and WebSocket)."""

import uvicorn

from status_relay.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "status_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
