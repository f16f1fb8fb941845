"""Terminal text utilities: width measurement and breakpoint word wrapping.

Widths are measured in terminal columns rather than characters, so CJK and
emoji graphemes count as two columns and ANSI escape sequences count as
none.  For plain ASCII every width equals ``len``.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# ANSI patterns
# ---------------------------------------------------------------------------

# CSI sequences (SGR and the cursor/erase codes this package emits),
# OSC 8 hyperlinks and APC payloads.
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[mGKHJlh]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

# Characters a cell may be wrapped after.
BREAKPOINT_CHARS = " :.-/\\"

TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation, ZWJ sequences, skin tones, flags
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000 or 0x2600 <= ord(first) <= 0x27BF:
        return 2

    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def _is_plain_ascii(text: str) -> bool:
    return all(0x20 <= ord(ch) <= 0x7E for ch in text)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Remove every ANSI escape sequence from *text*."""
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as ``TAB_WIDTH`` spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = strip_ansi(text).replace("\t", " " * TAB_WIDTH)
    if _is_plain_ascii(stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* that fits in *max_cols* columns.

    The prefix is cut at a grapheme boundary.  *text* is expected to be
    free of escape sequences.  Tabs count as ``TAB_WIDTH`` columns,
    matching :func:`visible_width`.
    """
    if max_cols <= 0:
        return ""
    if _is_plain_ascii(text):
        return text[:max_cols]

    cols = 0
    taken: list[str] = []
    for g in grapheme.graphemes(text):
        w = TAB_WIDTH if g == "\t" else _grapheme_width(g)
        if cols + w > max_cols:
            break
        taken.append(g)
        cols += w
    return "".join(taken)


# ---------------------------------------------------------------------------
# wrap_text
# ---------------------------------------------------------------------------


def _last_breakpoint(text: str) -> int:
    return max(text.rfind(ch) for ch in BREAKPOINT_CHARS)


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap *text* into lines no wider than *width* columns.

    Greedy: each line ends just after the last breakpoint character
    (space, ``:``, ``.``, ``-``, ``/`` or ``\\``) that fits; a run with no
    breakpoint is hard-broken at *width*.  A leading breakpoint such as the
    ``-`` of ``-flag`` still ends a line of its own.  The input, every line
    and the remainder are trimmed of surrounding whitespace, no other
    characters are dropped.

    An empty *text* yields a single empty line so that blank cells still
    occupy a row.
    """
    width = max(width, 0)
    remainder = text.strip()
    lines: list[str] = []

    while True:
        if visible_width(remainder) <= width:
            lines.append(remainder.strip())
            return lines

        head = take_columns(remainder, width)
        if not head:
            # A single grapheme wider than the column still has to go somewhere
            head = next(iter(grapheme.graphemes(remainder)))

        split = _last_breakpoint(head)
        if split >= 0:
            lines.append(head[: split + 1].strip())
            remainder = remainder[split + 1 :].strip()
        else:
            lines.append(head.strip())
            remainder = remainder[len(head) :].strip()

        if not remainder:
            return lines
