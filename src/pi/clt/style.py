"""ANSI styling: colors and text decorations composed into reusable styles.

A :class:`Style` is built once from one or more tokens and then applied to
any number of strings::

    warn = styled(YELLOW, BOLD)
    print(warn.apply_to("careful"))
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol


class Styler(Protocol):
    """Anything that carries an SGR "on" code and its matching "off" code."""

    def codes(self) -> tuple[int, int]: ...


@dataclass(frozen=True)
class Color:
    """An SGR foreground color."""

    on: int
    off: int

    def codes(self) -> tuple[int, int]:
        return self.on, self.off


@dataclass(frozen=True)
class TextStyle:
    """An SGR text decoration such as bold or underline."""

    on: int
    off: int

    def codes(self) -> tuple[int, int]:
        return self.on, self.off


@dataclass(frozen=True)
class Style:
    """A computed pair of escape sequences wrapped around content."""

    prefix: str = ""
    suffix: str = ""

    def apply_to(self, content: str) -> str:
        return f"{self.prefix}{content}{self.suffix}"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

BLACK = Color(30, 39)
RED = Color(31, 39)
GREEN = Color(32, 39)
YELLOW = Color(33, 39)
BLUE = Color(34, 39)
MAGENTA = Color(35, 39)
CYAN = Color(36, 39)
WHITE = Color(37, 39)
DEFAULT = Color(39, 39)

# Shortcuts
K = BLACK
R = RED
G = GREEN
Y = YELLOW
B = BLUE
M = MAGENTA
C = CYAN
W = WHITE
DEF = DEFAULT

BOLD = TextStyle(1, 22)
ITALIC = TextStyle(3, 23)
UNDERLINE = TextStyle(4, 24)

_BACKGROUND_OFFSET = 10


def background(color: Color) -> Color:
    """Return the background-range counterpart of *color*."""
    return replace(
        color,
        on=color.on + _BACKGROUND_OFFSET,
        off=color.off + _BACKGROUND_OFFSET,
    )


def styled(*tokens: Styler) -> Style:
    """Compose *tokens* into a single :class:`Style`.

    ``styled(RED, UNDERLINE)`` produces ``ESC[31;4m`` / ``ESC[39;24m``.
    Token order is kept.  With no tokens the style is a no-op.
    """
    if not tokens:
        return Style()
    pairs = [t.codes() for t in tokens]
    on = ";".join(str(code) for code, _ in pairs)
    off = ";".join(str(code) for _, code in pairs)
    return Style(prefix=f"\x1b[{on}m", suffix=f"\x1b[{off}m")


def sstyled(content: str, *tokens: Styler) -> str:
    """Shorthand for ``styled(*tokens).apply_to(content)``."""
    return styled(*tokens).apply_to(content)
