"""Application services."""

from status_relay.application.services.status_ingestion import StatusIngestionService

__all__ = ["StatusIngestionService"]
