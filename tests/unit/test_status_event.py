"""StatusEvent frame selection: text for UTF-8, binary otherwise."""

from status_relay.domain.events import StatusEvent


def test_utf8_payload_is_a_text_frame(status_payload) -> None:
    frame = StatusEvent(status_payload).as_frame()
    assert isinstance(frame, str)
    assert frame.encode("utf-8") == status_payload


def test_invalid_utf8_is_a_binary_frame() -> None:
    assert StatusEvent(b"\xc3\x28").as_frame() == b"\xc3\x28"


def test_length_is_payload_size() -> None:
    assert len(StatusEvent("Дозвонился".encode("utf-8"))) == 20
