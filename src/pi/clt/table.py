"""Tables with adaptive column widths.

A :class:`Table` measures every column, then steps through a fixed list of
layout strategies until one fits the available width:

1. ``simple`` -- every column at its natural width, if the whole table fits.
2. ``wrap-widest`` -- wrap only the widest column, provided it keeps at least
   half of its natural width.
3. ``overflow`` -- natural widths regardless, letting the terminal hard-wrap.

Example::

    table = Table(2).set_title("Results").set_headers("Status", "Reason")
    table.set_column_styles(styled(GREEN))
    table.add_row("OK", "Everything worked")
    table.add_styled_row(cell("FAIL", styled(RED)), cell("Something broke"))
    table.show()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Literal, get_args

from pi.clt.style import BOLD, DEFAULT, UNDERLINE, Style, Styler, styled
from pi.clt.terminal import FALLBACK_COLUMNS, FALLBACK_ROWS, ProcessTerminal
from pi.clt.utils import visible_width, wrap_text

if TYPE_CHECKING:
    from typing import TextIO

    from pi.clt.terminal import Terminal

logger = logging.getLogger(__name__)

Justification = Literal["left", "center", "right"]
LayoutStrategy = Literal["simple", "wrap-widest", "overflow"]

# Minimum share of its natural width the wrapped column must keep
_MIN_WRAP_RATIO = 0.5


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class Cell:
    """A single table cell.  ``style=None`` defers to the column's style."""

    value: str = ""
    style: Style | None = None
    width: int = field(init=False)

    def __post_init__(self) -> None:
        self.width = visible_width(self.value)


@dataclass
class Title:
    """Centered line above the table; omitted while ``value`` is empty."""

    value: str = ""
    style: Style = field(default_factory=lambda: styled(BOLD))


@dataclass
class Column:
    """Per-column layout state and defaults."""

    index: int
    natural_width: int = 0
    computed_width: int = 0
    wrap: bool = False
    style: Style = field(default_factory=lambda: styled(DEFAULT))
    justify: Justification = "left"


@dataclass
class Row:
    cells: list[Cell] = field(default_factory=list)


@dataclass
class TableOptions:
    """Overrides applied on top of the detected terminal size.

    ``max_width`` can only shrink the detected width, never grow it.
    """

    max_width: int | None = None
    max_height: int | None = None
    padding: int = 1


def cell(value: str, style: Style | None = None) -> Cell:
    """Return a cell with its own style, for use with :meth:`Table.add_styled_row`."""
    return Cell(value, style)


# ---------------------------------------------------------------------------
# Justification
# ---------------------------------------------------------------------------


def _spaces(n: int) -> str:
    return " " * max(n, 0)


def just_left(s: str, width: int, pad: int, style: Style) -> str:
    on_right = max(width - visible_width(s), 0)
    return f"{_spaces(pad)}{style.apply_to(s)}{_spaces(on_right + pad)}"


def just_right(s: str, width: int, pad: int, style: Style) -> str:
    on_left = max(width - visible_width(s), 0)
    return f"{_spaces(on_left + pad)}{style.apply_to(s)}{_spaces(pad)}"


def just_center(s: str, width: int, pad: int, style: Style) -> str:
    content = visible_width(s)
    on_left = max((width - content) // 2, 0)
    on_right = max(width - content - on_left, 0)
    return f"{_spaces(on_left + pad)}{style.apply_to(s)}{_spaces(on_right + pad)}"


_JUSTIFIERS: dict[str, Callable[[str, int, int, Style], str]] = {
    "left": just_left,
    "center": just_center,
    "right": just_right,
}


def apply_justification(
    s: str, width: int, pad: int, style: Style, justify: Justification = "left"
) -> str:
    """Place *s* in a field of *width* columns plus *pad* spaces either side."""
    return _JUSTIFIERS[justify](s, width, pad, style)


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


class Table:
    """A console table that fits itself to the terminal width.

    Shape mismatches never raise: rows with too many values are truncated,
    rows with too few are padded with empty cells, and extra headers, styles
    or justifications are ignored.
    """

    def __init__(
        self,
        num_columns: int,
        options: TableOptions | None = None,
        *,
        terminal: Terminal | None = None,
    ) -> None:
        self._terminal: Terminal = terminal or ProcessTerminal()

        width, height, ok = self._terminal.get_size()
        if not ok or width == 0 or height == 0:
            logger.debug("Using fallback table size %dx%d", FALLBACK_COLUMNS, FALLBACK_ROWS)
            width, height = FALLBACK_COLUMNS, FALLBACK_ROWS

        opts = options or TableOptions()
        self.max_width = width if opts.max_width is None else min(width, opts.max_width)
        self.max_height = height if opts.max_height is None else opts.max_height
        self.padding = opts.padding

        self.title = Title(style=styled(DEFAULT))
        self.columns = [Column(index=i) for i in range(num_columns)]
        self.headers = [Cell(style=styled(DEFAULT)) for _ in range(num_columns)]
        self.rows: list[Row] = []

    # -- configuration --------------------------------------------------------

    def set_title(self, value: str, *tokens: Styler) -> Table:
        """Set the title, bold unless other style tokens are given."""
        self.title = Title(value, styled(*tokens) if tokens else styled(BOLD))
        return self

    def set_headers(self, *labels: str) -> Table:
        """Set column headers, styled bold and underlined."""
        for header, label in zip(self.headers, labels):
            header.value = label
            header.width = visible_width(label)
            header.style = styled(BOLD, UNDERLINE)
        return self

    def set_header_styles(self, *styles: Style) -> Table:
        for header, style in zip(self.headers, styles):
            header.style = style
        return self

    def set_column_styles(self, *styles: Style) -> Table:
        """Set the default style of each column's cells (headers excluded)."""
        for column, style in zip(self.columns, styles):
            column.style = style
        return self

    def set_justification(self, *values: Justification) -> Table:
        """Set per-column alignment; values past the last column are ignored."""
        for value in values[: len(self.columns)]:
            if value not in get_args(Justification):
                raise ValueError(f"Unknown justification: {value!r}")
        for column, value in zip(self.columns, values):
            column.justify = value
        return self

    def set_writer(self, stream: TextIO) -> Table:
        """Send :meth:`show` output to *stream* instead of stdout."""
        self._terminal = ProcessTerminal(stream)
        return self

    # -- rows -----------------------------------------------------------------

    def _normalize(self, cells: list[Cell]) -> Row:
        n = len(self.columns)
        if len(cells) > n:
            logger.debug("Dropping %d cell(s) beyond %d columns", len(cells) - n, n)
        row = Row(cells[:n])
        while len(row.cells) < n:
            row.cells.append(Cell(style=styled(DEFAULT)))
        return row

    def add_row(self, *values: str) -> Table:
        """Append a row of plain values using each column's style."""
        self.rows.append(self._normalize([Cell(v) for v in values]))
        return self

    def add_styled_row(self, *cells: Cell) -> Table:
        """Append a row of pre-styled cells (see :func:`cell`)."""
        self.rows.append(self._normalize(list(cells)))
        return self

    # -- layout ---------------------------------------------------------------

    @property
    def width(self) -> int:
        """Full rendered width, padding included."""
        return sum(c.computed_width for c in self.columns) + 2 * self.padding * len(self.columns)

    def _compute_natural_widths(self) -> None:
        for i, column in enumerate(self.columns):
            widths = [self.headers[i].width, *(row.cells[i].width for row in self.rows)]
            column.natural_width = max(widths)
            column.wrap = False

    def _simple_strategy(self) -> bool:
        total = sum(c.natural_width + 2 * self.padding for c in self.columns)
        if total > self.max_width:
            return False
        for column in self.columns:
            column.computed_width = column.natural_width
        return True

    def _wrap_widest_strategy(self) -> bool:
        if not self.columns:
            return False
        # max() keeps the first column on ties
        widest = max(self.columns, key=lambda c: c.natural_width)
        if widest.natural_width == 0:
            return False

        budget = self.max_width - 2 * self.padding * len(self.columns)
        others = sum(c.natural_width for c in self.columns if c is not widest)
        wrap_width = budget - others
        if wrap_width / widest.natural_width < _MIN_WRAP_RATIO:
            return False

        for column in self.columns:
            column.computed_width = column.natural_width
        widest.computed_width = wrap_width
        widest.wrap = True
        return True

    def _overflow_strategy(self) -> bool:
        for column in self.columns:
            column.computed_width = column.natural_width
        return True

    def compute_column_widths(self) -> LayoutStrategy:
        """Measure the columns and apply the first layout strategy that fits."""
        self._compute_natural_widths()

        strategies: list[tuple[LayoutStrategy, Callable[[], bool]]] = [
            ("simple", self._simple_strategy),
            ("wrap-widest", self._wrap_widest_strategy),
            ("overflow", self._overflow_strategy),
        ]
        for name, strategy in strategies:
            if strategy():
                logger.debug(
                    "Table layout %s: widths=%s max_width=%d",
                    name,
                    [c.computed_width for c in self.columns],
                    self.max_width,
                )
                return name

        logger.critical("No table rendering strategy suitable")
        raise RuntimeError("No table rendering strategy suitable")

    # -- rendering ------------------------------------------------------------

    def _render_cells(self, cells: list[Cell], styles: list[Style]) -> list[str]:
        wrapped = [
            wrap_text(c.value, column.computed_width) for c, column in zip(cells, self.columns)
        ]
        total_lines = max((len(w) for w in wrapped), default=0)

        lines: list[str] = []
        for n in range(total_lines):
            parts = []
            for fragments, column, style in zip(wrapped, self.columns, styles):
                text = fragments[n] if n < len(fragments) else ""
                parts.append(
                    apply_justification(
                        text, column.computed_width, self.padding, style, column.justify
                    )
                )
            lines.append("".join(parts))
        return lines

    def _render_title(self) -> str:
        return just_center(self.title.value, self.width, 0, self.title.style)

    def render(self) -> str:
        """Return the whole table, title and headers included, as a string."""
        self.compute_column_widths()

        out: list[str] = []
        if self.title.value:
            out.append(self._render_title())
            out.append("")
        if any(h.value for h in self.headers):
            out.extend(self._render_cells(self.headers, [h.style for h in self.headers]))
        for row in self.rows:
            styles = [
                c.style if c.style is not None else column.style
                for c, column in zip(row.cells, self.columns)
            ]
            out.extend(self._render_cells(row.cells, styles))

        return "".join(f"{line}\n" for line in out)

    def show(self) -> None:
        """Render the table and write it to the table's terminal."""
        self._terminal.write(self.render())
