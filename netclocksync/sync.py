"""Synchronisation state of a node and its reaction to receive timeouts."""

from __future__ import annotations

from netclocksync.messages import MessageType

SYNC_NONE = 255
SYNC_START_TIMEOUT = 20.0
DELAY_TIMEOUT = 5.0

_EXPECTABLE = frozenset({
    MessageType.NONE,
    MessageType.SYNC_START,
    MessageType.DELAY_REQUEST,
    MessageType.DELAY_RESPONSE,
})


class SyncManager:
    """Tracks the synchronisation level and the next expected message.

    ``peer_id`` and ``timestamp`` describe the last synchronisation and are
    meaningless while ``level`` equals ``SYNC_NONE``.
    """

    def __init__(self) -> None:
        self.peer_id = 0
        self.level = SYNC_NONE
        self.timestamp = 0
        self.expected: int = MessageType.NONE

    def set_expected(self, kind: int) -> None:
        """Set the next expected message, which must be a synchronisation step."""
        if kind not in _EXPECTABLE:
            raise ValueError(f"message type {kind} cannot be expected")
        self.expected = MessageType(kind)

    def update_expected(self, kind: int, peer_count: int) -> None:
        """Advance the expected message after a message of ``kind`` was handled."""
        if kind in (MessageType.HELLO, MessageType.HELLO_REPLY):
            if peer_count == 0:
                self.set_expected(MessageType.SYNC_START)
        elif kind == MessageType.SYNC_START:
            self.set_expected(MessageType.DELAY_RESPONSE)
        elif kind in (MessageType.DELAY_REQUEST, MessageType.DELAY_RESPONSE):
            self.set_expected(MessageType.SYNC_START)

    def cancel(self) -> None:
        """Drop the current synchronisation."""
        self.level = SYNC_NONE

    def on_sync_start_timeout(self, peer_address: tuple[str, int] | None) -> None:
        """React to a missing SYNC_START from the peer at ``peer_address``."""
        self.cancel()

    def on_delay_timeout(self) -> None:
        """React to a missing delay request or response."""
        self.set_expected(MessageType.SYNC_START)

    def receive_timeout(self) -> float | None:
        """Return the receive timeout in seconds for the current state, if any."""
        if self.expected == MessageType.SYNC_START:
            return SYNC_START_TIMEOUT
        return None