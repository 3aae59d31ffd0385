"""Tests for domain exceptions (error_code, message, details, close codes)."""

from status_relay.domain.exceptions import (
    HandshakeRejected,
    NotificationReadException,
    OriginNotAllowed,
    RelayException,
    SubscriberLimitExceeded,
    ValidationException,
)


def test_relay_exception_default_error_code() -> None:
    """Base RelayException uses class name as error_code when not provided."""
    exc = RelayException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "RelayException"
    assert exc.details == {}


def test_relay_exception_to_dict() -> None:
    exc = RelayException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    exc = ValidationException("Invalid status provided", field="status")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "status"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Invalid").details == {}


def test_notification_read_exception() -> None:
    exc = NotificationReadException()
    assert exc.error_code == "NOTIFICATION_READ_ERROR"
    assert "body" in exc.message


def test_handshake_refusals_carry_close_codes() -> None:
    origin = OriginNotAllowed("http://evil.example")
    limit = SubscriberLimitExceeded(10)
    assert isinstance(origin, HandshakeRejected)
    assert isinstance(limit, HandshakeRejected)
    assert origin.close_code == 1008
    assert origin.details == {"origin": "http://evil.example"}
    assert limit.close_code == 1013
    assert limit.error_code == "SUBSCRIBER_LIMIT_EXCEEDED"
