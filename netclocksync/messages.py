"""Wire messages exchanged between nodes, kept in big-endian byte order."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum


class MessageType(IntEnum):
    """Type byte carried at the start of every message."""

    NONE = 0
    HELLO = 1
    HELLO_REPLY = 2
    CONNECT = 3
    ACK_CONNECT = 4
    SYNC_START = 11
    DELAY_REQUEST = 12
    DELAY_RESPONSE = 13
    LEADER = 21
    GET_TIME = 31
    TIME = 32


MAX_MESSAGE_VALUE = 255


@dataclass(frozen=True)
class _Layout:
    layout: struct.Struct
    fields: tuple[str, ...]
    allow_unknown_sender: bool
    shown_fields: tuple[str, ...]


def _layout(fmt: str, fields: tuple[str, ...], allow: bool,
            shown: tuple[str, ...] | None = None) -> _Layout:
    return _Layout(struct.Struct(fmt), fields, allow,
                   fields if shown is None else shown)


_BASE = ">B"
_STAMPED = ">BBQ"
_STAMPED_FIELDS = ("synchronized", "timestamp")

_LAYOUTS: dict[int, _Layout] = {
    MessageType.HELLO: _layout(_BASE, (), True),
    MessageType.HELLO_REPLY: _layout(">BH", ("count",), True),
    MessageType.CONNECT: _layout(_BASE, (), True),
    MessageType.ACK_CONNECT: _layout(_BASE, (), True),
    MessageType.SYNC_START: _layout(_STAMPED, _STAMPED_FIELDS, False,
                                    ("timestamp", "synchronized")),
    MessageType.DELAY_REQUEST: _layout(_BASE, (), False),
    MessageType.DELAY_RESPONSE: _layout(_STAMPED, _STAMPED_FIELDS, False),
    MessageType.LEADER: _layout(">BB", ("synchronized",), True),
    MessageType.GET_TIME: _layout(_BASE, (), True),
    MessageType.TIME: _layout(_STAMPED, _STAMPED_FIELDS, True),
}

_FIELD_LABELS = {
    "count": "Count",
    "synchronized": "Synchronized",
    "timestamp": "Timestamp",
}


def _as_kind(kind: int) -> int:
    try:
        return MessageType(kind)
    except ValueError:
        return kind


def message_size(kind: int) -> int:
    """Return the fixed wire size of a message type, 0 for unknown types."""
    layout = _LAYOUTS.get(kind)
    return layout.layout.size if layout else 0


def allows_unknown_sender(kind: int) -> bool:
    """Tell whether a message of this type may come from an unknown peer."""
    layout = _LAYOUTS.get(kind)
    return layout.allow_unknown_sender if layout else False


def message_name(kind: int) -> str:
    """Return the symbolic name of a message type, or ``UNKNOWN``."""
    if kind in _LAYOUTS:
        return f"MSG_{MessageType(kind).name}"
    return "UNKNOWN"


@dataclass(frozen=True)
class Message:
    """A single protocol message with its optional fields."""

    kind: int
    count: int = 0
    synchronized: int = 0
    timestamp: int = 0

    def encode(self) -> bytes:
        """Serialise the message to its big-endian wire form."""
        layout = _LAYOUTS.get(self.kind)
        try:
            if layout is None:
                return struct.pack(_BASE, self.kind)
            values = (getattr(self, name) for name in layout.fields)
            return layout.layout.pack(self.kind, *values)
        except struct.error as exc:
            raise ValueError(f"cannot encode message: {exc}") from exc

    def describe(self) -> str:
        """Return a human-readable multi-line description."""
        layout = _LAYOUTS.get(self.kind)
        if layout is None:
            return f"Message:\n  Unknown message type: {self.kind}"
        lines = ["Message:", f"  Type: {MessageType(self.kind).name}"]
        lines.extend(f"  {_FIELD_LABELS[name]}: {getattr(self, name)}"
                     for name in layout.shown_fields)
        return "\n".join(lines)


def decode_message(data: bytes) -> Message:
    """Read the message at the start of ``data``."""
    if not data:
        raise ValueError("empty message")
    kind = data[0]
    layout = _LAYOUTS.get(kind)
    if layout is None:
        return Message(_as_kind(kind))
    if len(data) < layout.layout.size:
        raise ValueError(
            f"{message_name(kind)} needs {layout.layout.size} bytes, "
            f"got {len(data)}"
        )
    values = layout.layout.unpack_from(data)
    return Message(MessageType(kind), **dict(zip(layout.fields, values[1:])))