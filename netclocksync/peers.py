"""Known peers of a node and their wire representation."""

from __future__ import annotations

import ipaddress
import struct
from collections.abc import Iterator
from dataclasses import dataclass

PEER_MAX_COUNT = 65535
IPV4_ADDRESS_LENGTH = 4
_MAX_ADDRESS_LENGTH = 16
_PEER_LAYOUT = struct.Struct(">B16sH")
PEER_SIZE = _PEER_LAYOUT.size


class PeerLimitError(Exception):
    """Raised when the peer registry cannot hold another peer."""


@dataclass(frozen=True)
class Peer:
    """A peer given by its raw address bytes and port in host order."""

    address: bytes
    port: int

    def __post_init__(self) -> None:
        if len(self.address) > _MAX_ADDRESS_LENGTH:
            raise ValueError("peer address longer than 16 bytes")
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"invalid port {self.port}")

    def encode(self) -> bytes:
        """Serialise the peer to its fixed-size wire form."""
        return _PEER_LAYOUT.pack(len(self.address), self.address, self.port)

    def describe(self) -> str:
        """Return a human-readable multi-line description."""
        dotted = ".".join(str(octet) for octet in self.address)
        return "\n".join([
            "Peer:",
            f"  Address Length: {len(self.address)}",
            f"  Address: {dotted}",
            f"  Port: {self.port}",
        ])


def decode_peer(data: bytes) -> Peer:
    """Read one peer record from the start of ``data``."""
    if len(data) < PEER_SIZE:
        raise ValueError(f"peer record needs {PEER_SIZE} bytes, got {len(data)}")
    length, raw, port = _PEER_LAYOUT.unpack_from(data)
    if length > _MAX_ADDRESS_LENGTH:
        raise ValueError(f"invalid peer address length {length}")
    return Peer(raw[:length], port)


def decode_peers(data: bytes, count: int) -> list[Peer]:
    """Read ``count`` consecutive peer records from ``data``."""
    if len(data) < count * PEER_SIZE:
        raise ValueError(f"{count} peers need {count * PEER_SIZE} bytes")
    return [decode_peer(data[start:start + PEER_SIZE])
            for start in range(0, count * PEER_SIZE, PEER_SIZE)]


class PeerRegistry:
    """An ordered collection of known peers with a size limit."""

    def __init__(self, limit: int = PEER_MAX_COUNT) -> None:
        self._limit = limit
        self._peers: list[Peer] = []

    def add(self, peer: Peer) -> None:
        """Append a peer, raising PeerLimitError if the registry is full."""
        if len(self._peers) >= self._limit:
            raise PeerLimitError("Too many peers")
        self._peers.append(peer)

    def find(self, host: str, port: int) -> Peer | None:
        """Return the first peer with the given IPv4 host and port, if any."""
        packed = ipaddress.IPv4Address(host).packed
        for peer in self._peers:
            padded = peer.address.ljust(_MAX_ADDRESS_LENGTH, b"\0")
            if peer.port == port and padded[:IPV4_ADDRESS_LENGTH] == packed:
                return peer
        return None

    def index(self, peer: Peer) -> int:
        """Return the position of a peer, raising ValueError if absent."""
        return self._peers.index(peer)

    def without(self, index: int | None) -> list[Peer]:
        """Return all peers except the one at ``index`` (all when None)."""
        return [peer for position, peer in enumerate(self._peers)
                if position != index]

    def __len__(self) -> int:
        return len(self._peers)

    def __iter__(self) -> Iterator[Peer]:
        return iter(self._peers)