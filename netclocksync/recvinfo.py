"""Information about a received message, gathered for its handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from netclocksync.messages import Message, MessageType, message_size
from netclocksync.peers import Peer, decode_peers

_WITH_PAYLOAD = frozenset({
    MessageType.HELLO_REPLY,
    MessageType.SYNC_START,
    MessageType.DELAY_RESPONSE,
    MessageType.LEADER,
    MessageType.TIME,
})


@dataclass(frozen=True)
class ReceiveInfo:
    """A received message's type and sender, with its payload where it has one."""

    kind: int
    sender: tuple[str, int]
    message: Message | None = None
    peers: tuple[Peer, ...] = field(default_factory=tuple)


def load_receive_info(sender: tuple[str, int], message: Message,
                      data: bytes) -> ReceiveInfo:
    """Build the receive info for ``message`` read from the datagram ``data``."""
    if message.kind not in _WITH_PAYLOAD:
        return ReceiveInfo(message.kind, sender)
    peers: tuple[Peer, ...] = ()
    if message.kind == MessageType.HELLO_REPLY and message.count > 0:
        offset = message_size(message.kind)
        peers = tuple(decode_peers(data[offset:], message.count))
    return ReceiveInfo(message.kind, sender, message, peers)