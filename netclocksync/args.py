"""Command-line options of a node."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_PORT = 0

_OPTION = re.compile(r"-[bpar]")
_PORT = re.compile(r"\s*\+?[0-9]+")


class ArgumentError(Exception):
    """Raised for malformed command-line arguments."""


@dataclass
class ProgramArgs:
    """Options given on the command line."""

    bind_address: str | None = None
    port: int = DEFAULT_PORT
    peer_address: str | None = None
    peer_port: int = DEFAULT_PORT
    peer_provided: bool = False

    def validate(self) -> None:
        """Check that the options are consistent, raising ArgumentError if not."""
        for name, value in (("port", self.port), ("peer port", self.peer_port)):
            if not 0 <= value <= 0xFFFF:
                raise ArgumentError(f"invalid {name} {value}")
        if self.peer_provided and (self.peer_address is None or self.peer_port == 0):
            raise ArgumentError("-a and -r not provided both.")

    def describe(self) -> str:
        """Return a human-readable multi-line description."""
        return "\n".join([
            "ProgramArgs:",
            f"  Bind Address: {self.bind_address or 'NULL'}",
            f"  Port: {self.port}",
            f"  Peer Address: {self.peer_address or 'NULL'}",
            f"  Peer Port: {self.peer_port}",
        ])


def read_port(text: str) -> int:
    """Parse a decimal port number in the range 1..65535."""
    if not _PORT.fullmatch(text):
        raise ArgumentError("Given port is not a valid port number")
    port = int(text)
    if not 0 < port <= 0xFFFF:
        raise ArgumentError("Given port is not a valid port number")
    return port


def parse_args(argv: Sequence[str]) -> ProgramArgs:
    """Parse option/value pairs (without the program name)."""
    if len(argv) % 2 == 1:
        raise ArgumentError("Incorrect arguments: odd number...")

    args = ProgramArgs()
    seen: set[str] = set()
    for option, value in zip(argv[::2], argv[1::2]):
        if not _OPTION.fullmatch(option):
            raise ArgumentError("Wrong parameters!")
        letter = option[1]
        if letter == "b":
            args.bind_address = value
        elif letter == "p":
            args.port = read_port(value)
        elif letter == "a":
            args.peer_address = value
        else:
            args.peer_port = read_port(value)
        seen.add(letter)

    has_address, has_port = "a" in seen, "r" in seen
    if has_address != has_port:
        raise ArgumentError("-a and -r not provided both.")
    args.peer_provided = has_address
    return args