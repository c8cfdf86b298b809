import io

from netclocksync.logs import log_received_message, log_sending_peers, log_sent_message
from netclocksync.messages import Message, MessageType
from netclocksync.peers import Peer


def test_received_message_header_and_body():
    out = io.StringIO()
    msg = Message(MessageType.HELLO)
    log_received_message(("127.0.0.1", 5000), msg, 1, out)
    text = out.getvalue()
    assert text.startswith("Received MSG_HELLO message (1 bytes) from 127.0.0.1:5000\n")
    assert msg.describe() in text
    assert text.endswith("\n\n")


def test_sent_message_header_and_body():
    out = io.StringIO()
    msg = Message(MessageType.TIME, synchronized=1, timestamp=42)
    log_sent_message(("10.0.0.1", 7000), msg, 10, out)
    text = out.getvalue()
    assert text.startswith("Sent MSG_TIME message (10 bytes) to 10.0.0.1:7000\n")
    assert msg.describe() in text


def test_sending_peers_lists_every_peer():
    out = io.StringIO()
    peers = [Peer(bytes([10, 0, 0, 1]), 1), Peer(bytes([10, 0, 0, 2]), 2)]
    log_sending_peers(peers, out)
    text = out.getvalue()
    assert text.startswith("Sending peers:\n")
    for peer in peers:
        assert peer.describe() in text


def test_sending_no_peers_writes_only_header():
    out = io.StringIO()
    log_sending_peers([], out)
    assert out.getvalue() == "Sending peers:\n"