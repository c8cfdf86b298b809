"""Address handling, socket setup and validation of received datagrams."""

from __future__ import annotations

import socket

from netclocksync.messages import MessageType, message_size
from netclocksync.peers import IPV4_ADDRESS_LENGTH, PEER_SIZE, Peer

BUFFER_SIZE = 65535
DEFAULT_TIMEOUT = 5.0

_INADDR_NONE = b"\xff\xff\xff\xff"


class ReceiveError(Exception):
    """Raised when a received datagram is malformed."""


def resolve_address(host: str, port: int) -> tuple[str, int]:
    """Resolve ``host`` to an IPv4 UDP address paired with ``port``."""
    results = socket.getaddrinfo(host, None, socket.AF_INET,
                                 socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    ip = results[0][4][0]
    return ip, port


def _bind_ip(address: str | None) -> str:
    if address is None:
        return "0.0.0.0"
    try:
        packed = socket.inet_aton(address)
    except OSError as exc:
        raise ValueError("Invalid IPv4 address") from exc
    if packed == _INADDR_NONE:
        raise ValueError("Invalid IPv4 address")
    return socket.inet_ntoa(packed)


def open_socket(bind_address: str | None, port: int,
                timeout: float | None = DEFAULT_TIMEOUT) -> socket.socket:
    """Create a UDP socket with a receive timeout, bound to the given address."""
    ip = _bind_ip(bind_address)
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.settimeout(timeout)
        sock.bind((ip, port))
    except OSError:
        sock.close()
        raise
    return sock


def peer_to_address(peer: Peer) -> tuple[str, int]:
    """Return the IPv4 socket address of a peer."""
    raw = peer.address.ljust(IPV4_ADDRESS_LENGTH, b"\0")[:IPV4_ADDRESS_LENGTH]
    return resolve_address(socket.inet_ntop(socket.AF_INET, raw), peer.port)


def address_to_peer(address: tuple[str, int]) -> Peer:
    """Build a peer record from an IPv4 socket address."""
    host, port = address[0], address[1]
    return Peer(socket.inet_aton(host), port)


def _validate_peers(data: bytes) -> None:
    header = message_size(MessageType.HELLO_REPLY)
    count = int.from_bytes(data[1:header], "big")
    needed = header + count * PEER_SIZE
    if len(data) < needed:
        raise ReceiveError("Received incorrect peers")
    for offset in range(header, needed, PEER_SIZE):
        if data[offset] != IPV4_ADDRESS_LENGTH:
            raise ReceiveError("Received incorrect peers")


def validate_received_data(data: bytes) -> int:
    """Check a received datagram and return its length.

    Raises ReceiveError if it is shorter than its message type requires or,
    for HELLO_REPLY, if the attached peers are not valid IPv4 records.
    """
    if not data:
        raise ReceiveError("recvfrom returned no data")
    if len(data) < message_size(data[0]):
        raise ReceiveError("recvfrom less bytes than message size.")
    if data[0] == MessageType.HELLO_REPLY:
        _validate_peers(data)
    return len(data)