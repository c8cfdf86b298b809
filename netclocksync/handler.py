"""Dispatching of received messages and receive timeouts."""

from __future__ import annotations

import sys
from typing import TextIO

from netclocksync.logs import log_received_message
from netclocksync.messages import MessageType, allows_unknown_sender, decode_message
from netclocksync.netutil import address_to_peer, peer_to_address
from netclocksync.peers import PeerRegistry
from netclocksync.recvinfo import ReceiveInfo, load_receive_info
from netclocksync.send import Sender
from netclocksync.sync import SyncManager


class UnknownSenderError(Exception):
    """Raised when a message that needs a known sender comes from a stranger."""


class Handler:
    """Reacts to received messages by updating peers, replying and syncing."""

    def __init__(self, peers: PeerRegistry, sync: SyncManager, sender: Sender,
                 stream: TextIO | None = None) -> None:
        self._peers = peers
        self._sync = sync
        self._sender = sender
        self._stream = stream
        self._dispatch = {
            MessageType.HELLO: self._hello,
            MessageType.HELLO_REPLY: self._hello_reply,
            MessageType.CONNECT: self._connect,
            MessageType.ACK_CONNECT: self._ack_connect,
            MessageType.SYNC_START: self._ignore,
            MessageType.DELAY_REQUEST: self._ignore,
            MessageType.DELAY_RESPONSE: self._ignore,
            MessageType.LEADER: self._ignore,
            MessageType.GET_TIME: self._ignore,
            MessageType.TIME: self._ignore,
        }

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _is_known(self, address: tuple[str, int]) -> bool:
        return self._peers.find(address[0], address[1]) is not None

    def _remember(self, address: tuple[str, int]) -> None:
        if not self._is_known(address):
            self._peers.add(address_to_peer(address))

    def _hello(self, info: ReceiveInfo) -> None:
        if not self._sender.hello_reply(info.sender):
            self._peers.add(address_to_peer(info.sender))

    def _hello_reply(self, info: ReceiveInfo) -> None:
        if not info.peers:
            return
        out = self._out()
        out.write("Peers from HELLO_REPLY:\n")
        for peer in info.peers:
            out.write(f"{peer.describe()}\n")
        for peer in info.peers:
            self._sender.connect(peer_to_address(peer))

    def _connect(self, info: ReceiveInfo) -> None:
        self._remember(info.sender)
        self._sender.ack_connect(info.sender)

    def _ack_connect(self, info: ReceiveInfo) -> None:
        self._remember(info.sender)

    def _ignore(self, info: ReceiveInfo) -> None:
        """Synchronisation messages carry no action yet beyond the state change."""

    def handle_message(self, address: tuple[str, int], data: bytes) -> None:
        """Handle the datagram ``data`` received from ``address``."""
        message = decode_message(data)
        if not allows_unknown_sender(message.kind) and not self._is_known(address):
            raise UnknownSenderError(
                f"message from unknown sender {address[0]}:{address[1]}"
            )
        info = load_receive_info(address, message, data)
        log_received_message(address, message, len(data), self._stream)
        action = self._dispatch.get(message.kind)
        if action is None:
            return
        action(info)
        self._sync.update_expected(message.kind, len(self._peers))

    def handle_recv_fail(self, address: tuple[str, int] | None) -> None:
        """React to a failed or timed-out receive in the current sync state."""
        expected = self._sync.expected
        if expected == MessageType.SYNC_START:
            self._sync.on_sync_start_timeout(address)
        elif expected in (MessageType.DELAY_REQUEST, MessageType.DELAY_RESPONSE):
            self._sync.on_delay_timeout()