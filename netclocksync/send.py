"""Building and sending the connection-phase messages."""

from __future__ import annotations

import socket
from typing import TextIO

from netclocksync.logs import log_sending_peers, log_sent_message
from netclocksync.messages import Message, MessageType
from netclocksync.peers import Peer, PeerRegistry


def build_hello_reply(peers: PeerRegistry, exclude: int | None) -> bytes:
    """Return a HELLO_REPLY datagram listing all peers but the one at ``exclude``."""
    listed = peers.without(exclude)
    header = Message(MessageType.HELLO_REPLY, count=len(listed)).encode()
    return header + b"".join(peer.encode() for peer in listed)


class Sender:
    """Sends protocol messages through a UDP socket and logs them."""

    def __init__(self, sock: socket.socket, peers: PeerRegistry,
                 stream: TextIO | None = None) -> None:
        self._sock = sock
        self._peers = peers
        self._stream = stream

    def _send(self, address: tuple[str, int], message: Message,
              payload: bytes | None = None) -> int:
        data = message.encode() if payload is None else payload
        sent = self._sock.sendto(data, address)
        log_sent_message(address, message, sent, self._stream)
        return sent

    def hello(self, address: tuple[str, int]) -> int:
        """Send HELLO to ``address`` and return the number of bytes sent."""
        return self._send(address, Message(MessageType.HELLO))

    def hello_reply(self, address: tuple[str, int]) -> bool:
        """Send HELLO_REPLY with the known peers, leaving out the receiver.

        Returns whether the receiver was already a known peer.
        """
        known: Peer | None = self._peers.find(address[0], address[1])
        exclude = self._peers.index(known) if known is not None else None
        listed = self._peers.without(exclude)
        message = Message(MessageType.HELLO_REPLY, count=len(listed))
        payload = build_hello_reply(self._peers, exclude)
        log_sending_peers(listed, self._stream)
        self._send(address, message, payload)
        return known is not None

    def connect(self, address: tuple[str, int]) -> int:
        """Send CONNECT to ``address`` and return the number of bytes sent."""
        return self._send(address, Message(MessageType.CONNECT))

    def ack_connect(self, address: tuple[str, int]) -> int:
        """Send ACK_CONNECT to ``address`` and return the number of bytes sent."""
        return self._send(address, Message(MessageType.ACK_CONNECT))