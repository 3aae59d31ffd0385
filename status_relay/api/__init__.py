"""HTTP and WebSocket API for the relay and the ingestion service."""
