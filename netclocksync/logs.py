"""Diagnostic log lines for messages sent to and received from peers."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from netclocksync.messages import Message, message_name
from netclocksync.peers import Peer


def _out(stream: TextIO | None) -> TextIO:
    return stream if stream is not None else sys.stderr


def log_received_message(sender: tuple[str, int], message: Message,
                         length: int, stream: TextIO | None = None) -> None:
    """Log a message of ``length`` bytes received from ``sender``."""
    host, port = sender[0], sender[1]
    _out(stream).write(
        f"Received {message_name(message.kind)} message ({length} bytes) "
        f"from {host}:{port}\n{message.describe()}\n\n"
    )


def log_sent_message(address: tuple[str, int], message: Message,
                     length: int, stream: TextIO | None = None) -> None:
    """Log a message of ``length`` bytes sent to ``address``."""
    host, port = address[0], address[1]
    _out(stream).write(
        f"Sent {message_name(message.kind)} message ({length} bytes) "
        f"to {host}:{port}\n{message.describe()}\n\n"
    )


def log_sending_peers(peers: Iterable[Peer],
                      stream: TextIO | None = None) -> None:
    """Log the peers attached to an outgoing HELLO_REPLY."""
    out = _out(stream)
    out.write("Sending peers:\n")
    for peer in peers:
        out.write(f"{peer.describe()}\n")