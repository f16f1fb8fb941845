"""Terminal abstraction: size detection and an output sink.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that
writes to ``sys.stdout`` (or any text stream) and queries the size of the
attached terminal.  Both the table and the progress indicators only ever
talk to a ``Terminal``, so tests can substitute an in-memory one.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"
CARRIAGE_RETURN = "\r"

FALLBACK_COLUMNS = 80
FALLBACK_ROWS = 25


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal output and size queries."""

    def write(self, data: str) -> None: ...

    def get_size(self) -> tuple[int, int, bool]: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by a text stream, ``sys.stdout`` unless one is given.

    Writes are flushed immediately and are best effort: an ``OSError`` or
    the ``ValueError`` of a closed stream is dropped, since a broken pipe on
    a status line is not worth aborting the caller over.

    When ``PI_CLT_WRITE_LOG`` is set, every write is also appended to the
    named file.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._write_log_path: str = os.environ.get("PI_CLT_WRITE_LOG", "")

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so that a replaced sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    # -- size ---------------------------------------------------------------

    def get_size(self) -> tuple[int, int, bool]:
        """Return ``(width, height, ok)`` for the terminal behind the stream."""
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (AttributeError, ValueError, OSError) as exc:
            logger.debug("Terminal size unavailable: %s", exc)
            return 0, 0, False
        return size.columns, size.lines, True

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to the stream and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    def _raw_write(self, data: str) -> None:
        stream = self.stream
        try:
            stream.write(data)
            stream.flush()
        except (OSError, ValueError):
            # Broken pipe or a stream closed under us
            pass
