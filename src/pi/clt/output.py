"""Chainable builder for multi-line console messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.clt.terminal import ProcessTerminal

if TYPE_CHECKING:
    from pi.clt.terminal import Terminal


class OutputWriter:
    """Accumulate %-formatted text and write it out in one go.

    Example::

        OutputWriter().addln("Copied %d files", n).newline().render()
    """

    def __init__(self, terminal: Terminal | None = None) -> None:
        self._parts: list[str] = []
        self._terminal: Terminal = terminal or ProcessTerminal()

    def add(self, fmt: str, *args: object) -> OutputWriter:
        self._parts.append(fmt % args if args else fmt)
        return self

    def addln(self, fmt: str, *args: object) -> OutputWriter:
        """Like :meth:`add`, ending with a newline unless *fmt* already does."""
        if not fmt.endswith("\n"):
            fmt += "\n"
        return self.add(fmt, *args)

    def newline(self) -> OutputWriter:
        return self.newlines(1)

    def newlines(self, count: int) -> OutputWriter:
        self._parts.append("\n" * max(count, 0))
        return self

    def finalize(self) -> str:
        return "".join(self._parts)

    def render(self) -> None:
        self._terminal.write(self.finalize())
