"""pi-clt: styled console output, adaptive tables and progress indicators."""

# Styles
from pi.clt.style import (
    BLACK,
    BLUE,
    BOLD,
    CYAN,
    DEFAULT,
    GREEN,
    ITALIC,
    MAGENTA,
    RED,
    UNDERLINE,
    WHITE,
    YELLOW,
    Color,
    Style,
    Styler,
    TextStyle,
    background,
    sstyled,
    styled,
)

# Output builder
from pi.clt.output import OutputWriter

# Progress indicators
from pi.clt.progress import (
    SPINNER_ARROWS,
    SPINNER_DOTS,
    SPINNER_LINE,
    Progress,
    ProgressKind,
    ProgressState,
    new_bar,
    new_loading_message,
    new_spinner,
)

# Tables
from pi.clt.table import (
    Cell,
    Column,
    Justification,
    LayoutStrategy,
    Row,
    Table,
    TableOptions,
    Title,
    apply_justification,
    cell,
)

# Terminal interface and implementation
from pi.clt.terminal import ProcessTerminal, Terminal

# Utilities
from pi.clt.utils import strip_ansi, visible_width, wrap_text

__all__ = [
    # Styles
    "BLACK",
    "BLUE",
    "BOLD",
    "CYAN",
    "DEFAULT",
    "GREEN",
    "ITALIC",
    "MAGENTA",
    "RED",
    "UNDERLINE",
    "WHITE",
    "YELLOW",
    "Color",
    "Style",
    "Styler",
    "TextStyle",
    "background",
    "sstyled",
    "styled",
    # Output
    "OutputWriter",
    # Progress
    "SPINNER_ARROWS",
    "SPINNER_DOTS",
    "SPINNER_LINE",
    "Progress",
    "ProgressKind",
    "ProgressState",
    "new_bar",
    "new_loading_message",
    "new_spinner",
    # Tables
    "Cell",
    "Column",
    "Justification",
    "LayoutStrategy",
    "Row",
    "Table",
    "TableOptions",
    "Title",
    "apply_justification",
    "cell",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "strip_ansi",
    "visible_width",
    "wrap_text",
]
