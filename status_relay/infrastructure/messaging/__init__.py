"""Messaging: outbound status notifications to the relay."""

from status_relay.infrastructure.messaging.relay_notifier import RelayNotifier

__all__ = ["RelayNotifier"]
