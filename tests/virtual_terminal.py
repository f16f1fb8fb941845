"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``pi.clt.terminal.Terminal`` protocol without performing any real I/O.
All output is captured in a buffer for assertions.
"""

from __future__ import annotations

import threading


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    detected:
        When ``False``, ``get_size`` reports a failed detection.
    """

    def __init__(self, rows: int = 24, columns: int = 80, detected: bool = True) -> None:
        self._rows = rows
        self._columns = columns
        self._detected = detected
        self._buffer: list[str] = []
        # Progress indicators write from their render thread
        self._lock = threading.Lock()

    # -- Terminal protocol: size ------------------------------------------------

    def get_size(self) -> tuple[int, int, bool]:
        if not self._detected:
            return 0, 0, False
        return self._columns, self._rows, True

    # -- Terminal protocol: output ----------------------------------------------

    def write(self, data: str) -> None:
        """Append *data* to the internal buffer."""
        with self._lock:
            self._buffer.append(data)

    # -- Test helpers -----------------------------------------------------------

    @property
    def output(self) -> str:
        """Return everything written to the terminal as a single string."""
        with self._lock:
            return "".join(self._buffer)

    @property
    def writes(self) -> list[str]:
        """Return a copy of the individual ``write`` payloads."""
        with self._lock:
            return list(self._buffer)

    @property
    def write_count(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear_buffer(self) -> None:
        """Discard all recorded output."""
        with self._lock:
            self._buffer.clear()
