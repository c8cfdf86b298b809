"""Millisecond clocks measured from program start and from a movable mark."""

from __future__ import annotations

import time
from collections.abc import Callable

_NS_PER_MS = 1_000_000


class Clock:
    """A natural clock since creation and a restartable temporary clock."""

    def __init__(self, source: Callable[[], int] = time.monotonic_ns) -> None:
        self._source = source
        self._start = source()
        self._temporary_start = self._start

    def natural(self) -> int:
        """Milliseconds elapsed since the clock was created."""
        return (self._source() - self._start) // _NS_PER_MS

    def start_temporary(self) -> None:
        """Set a new reference point for the temporary clock."""
        self._temporary_start = self._source()

    def temporary(self) -> int:
        """Milliseconds elapsed since the temporary reference point."""
        return (self._source() - self._temporary_start) // _NS_PER_MS