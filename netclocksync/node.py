"""A clock synchronisation node: startup, the receive loop and shutdown."""

from __future__ import annotations

import signal
import socket
import sys
from collections.abc import Sequence
from types import FrameType
from typing import TextIO

from netclocksync.args import ArgumentError, ProgramArgs, parse_args
from netclocksync.clock import Clock
from netclocksync.handler import Handler, UnknownSenderError
from netclocksync.messages import MessageType
from netclocksync.netutil import (
    BUFFER_SIZE,
    ReceiveError,
    open_socket,
    resolve_address,
    validate_received_data,
)
from netclocksync.peers import Peer, PeerLimitError, PeerRegistry
from netclocksync.send import Sender
from netclocksync.sync import SyncManager

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

Address = tuple[str, int]

_FATAL_ERRORS = (
    ArgumentError,
    ReceiveError,
    UnknownSenderError,
    PeerLimitError,
    ValueError,
    OSError,
)


def _out(stream: TextIO | None) -> TextIO:
    return stream if stream is not None else sys.stderr


class Node:
    """A network node: its socket, known peers, clock and sync state."""

    def __init__(self, args: ProgramArgs, stream: TextIO | None = None) -> None:
        self.args = args
        self.stream = stream
        self.clock = Clock()
        self.peers = PeerRegistry()
        self.sync = SyncManager()
        self.sock = open_socket(args.bind_address, args.port)
        self.sender = Sender(self.sock, self.peers, stream)
        self.handler = Handler(self.peers, self.sync, self.sender, stream)
        self._closed = False
        self._last_sender: Address | None = None

    @property
    def closed(self) -> bool:
        """Whether the node's socket has been closed."""
        return self._closed

    def __enter__(self) -> Node:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def join_network(self) -> Address | None:
        """Greet the peer given on the command line, if any.

        Returns the address the HELLO was sent to, or None when no peer was given.
        """
        if not self.args.peer_provided:
            return None
        host, port = self.args.peer_address, self.args.peer_port
        if host is None:
            raise ArgumentError("-a and -r not provided both.")
        address = resolve_address(host, port)
        try:
            raw = socket.inet_pton(socket.AF_INET, host)
        except OSError as exc:
            raise ValueError("inet_pton failed") from exc
        self.peers.add(Peer(raw, port))
        self.sender.hello(address)
        return address

    def receive(self) -> tuple[Address, bytes] | None:
        """Wait for one datagram; return its sender and contents, None on timeout.

        Raises ReceiveError if the datagram is malformed.
        """
        try:
            data, address = self.sock.recvfrom(BUFFER_SIZE)
        except socket.timeout:
            _out(self.stream).write("recvfrom fail or timeout\n")
            return None
        validate_received_data(data)
        sender = (address[0], address[1])
        self._last_sender = sender
        return sender, data

    def listen(self) -> None:
        """Handle incoming messages and timeouts until the node is closed."""
        while not self._closed:
            try:
                received = self.receive()
            except OSError:
                if self._closed:
                    break
                raise
            if received is None:
                self.handler.handle_recv_fail(self._last_sender)
            else:
                self.handler.handle_message(*received)

    def close(self) -> None:
        """Close the socket; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.sock.close()
        _out(self.stream).write("Socket closed.\n")


def install_signal_handlers(node: Node) -> None:
    """Close ``node`` and exit on SIGINT; also list its peers on SIGQUIT."""

    def on_interrupt(signum: int, frame: FrameType | None) -> None:
        _out(node.stream).write(
            f"\nCaught signal {signum} (SIGINT). Closing socket and exiting...\n"
        )
        node.close()
        sys.exit(EXIT_INTERRUPTED)

    def on_quit(signum: int, frame: FrameType | None) -> None:
        out = _out(node.stream)
        out.write(f"\nCaught signal {signum} (EOF). Printing all peers:\n")
        for peer in node.peers:
            out.write(f"{peer.describe()}\n")
        out.write("\n")
        node.close()
        sys.exit(EXIT_FAILURE)

    signal.signal(signal.SIGINT, on_interrupt)
    quit_signal = getattr(signal, "SIGQUIT", None)
    if quit_signal is not None:
        signal.signal(quit_signal, on_quit)


def _fail(exc: BaseException) -> int:
    sys.stderr.write(f"{exc}, exiting...\n")
    return EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> int:
    """Run a node with the given command-line options."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = parse_args(argv)
        sys.stderr.write(f"{args.describe()}\n\n")
        args.validate()
        node = Node(args)
    except _FATAL_ERRORS as exc:
        return _fail(exc)

    try:
        install_signal_handlers(node)
        node.sync.set_expected(MessageType.NONE)
        node.join_network()
        node.listen()
    except _FATAL_ERRORS as exc:
        return _fail(exc)
    finally:
        node.close()
    return 0