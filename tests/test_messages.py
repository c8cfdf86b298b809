import pytest

from netclocksync.messages import (
    Message,
    MessageType,
    allows_unknown_sender,
    decode_message,
    message_name,
    message_size,
)

KNOWN = [t for t in MessageType if t is not MessageType.NONE]


def test_type_values_fixed_by_protocol():
    assert decode_message(b"\x01").kind == MessageType.HELLO
    assert Message(MessageType.SYNC_START).encode()[0] == 11
    assert Message(MessageType.TIME).encode()[0] == 32


@pytest.mark.parametrize("kind", KNOWN)
def test_size_matches_encoding(kind):
    assert len(Message(kind).encode()) == message_size(kind)


def test_unknown_size_is_zero():
    assert message_size(MessageType.NONE) == 0
    assert message_size(200) == 0


def test_hello_is_single_byte():
    assert Message(MessageType.HELLO).encode() == b"\x01"


def test_hello_reply_count_big_endian():
    assert Message(MessageType.HELLO_REPLY, count=2).encode() == b"\x02\x00\x02"


@pytest.mark.parametrize("kind", KNOWN)
def test_round_trip(kind):
    msg = Message(kind, count=0, synchronized=0, timestamp=0)
    if kind == MessageType.HELLO_REPLY:
        msg = Message(kind, count=513)
    elif kind in (MessageType.SYNC_START, MessageType.DELAY_RESPONSE, MessageType.TIME):
        msg = Message(kind, synchronized=3, timestamp=123456789012)
    elif kind == MessageType.LEADER:
        msg = Message(kind, synchronized=7)
    assert decode_message(msg.encode()) == msg


def test_decode_ignores_trailing_bytes():
    msg = Message(MessageType.HELLO_REPLY, count=1)
    assert decode_message(msg.encode() + b"\x04" * 19) == msg


def test_decode_too_short():
    with pytest.raises(ValueError):
        decode_message(b"\x0b\x00")


def test_decode_empty():
    with pytest.raises(ValueError):
        decode_message(b"")


def test_decode_unknown_kind():
    assert decode_message(b"\xc8").kind == 200


def test_unknown_sender_rules():
    assert allows_unknown_sender(MessageType.HELLO)
    assert allows_unknown_sender(MessageType.LEADER)
    assert not allows_unknown_sender(MessageType.SYNC_START)
    assert not allows_unknown_sender(MessageType.DELAY_REQUEST)
    assert not allows_unknown_sender(MessageType.DELAY_RESPONSE)
    assert not allows_unknown_sender(99)


def test_names():
    assert message_name(MessageType.HELLO_REPLY) == "MSG_HELLO_REPLY"
    assert message_name(MessageType.GET_TIME) == "MSG_GET_TIME"
    assert message_name(0) == "UNKNOWN"


def test_describe_sync_start_order():
    text = Message(MessageType.SYNC_START, synchronized=1, timestamp=5).describe()
    lines = text.splitlines()
    assert lines[1] == "  Type: SYNC_START"
    assert lines[2] == "  Timestamp: 5"
    assert lines[3] == "  Synchronized: 1"


def test_describe_hello_reply():
    text = Message(MessageType.HELLO_REPLY, count=4).describe()
    assert "  Count: 4" in text.splitlines()


def test_describe_unknown():
    assert "  Unknown message type: 77" in Message(77).describe()


def test_encode_out_of_range():
    with pytest.raises(ValueError):
        Message(MessageType.HELLO_REPLY, count=70000).encode()