"""
Screen contract and the cell buffer shared by the concrete screens.

A screen is the rendering and input surface the application drives: a
grid of cells, each holding one glyph and a :class:`Style`, plus a blocking
event source.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

from celltui.events import Event

# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Style:
    """
    Immutable cell style.  ``None`` colours mean the terminal default.

    The builder methods return a new style::

        Style().foreground("#ffffff").background("#0000ff")
    """

    fg: str | None = None
    bg: str | None = None
    bold: bool = False
    underline: bool = False
    reverse: bool = False

    def foreground(self, color: str | None) -> Style:
        return replace(self, fg=color)

    def background(self, color: str | None) -> Style:
        return replace(self, bg=color)

    def with_bold(self, on: bool = True) -> Style:
        return replace(self, bold=on)

    def with_underline(self, on: bool = True) -> Style:
        return replace(self, underline=on)

    def with_reverse(self, on: bool = True) -> Style:
        return replace(self, reverse=on)


STYLE_DEFAULT = Style()

Cell = tuple[str, Style]

EMPTY_CELL: Cell = (" ", STYLE_DEFAULT)


class CellBuffer:
    """A ``width`` x ``height`` grid of cells; out-of-range access is ignored."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = 0
        self.height = 0
        self._rows: list[list[Cell]] = []
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Change dimensions, keeping the overlapping top-left content."""
        width, height = max(0, width), max(0, height)
        rows = [[EMPTY_CELL] * width for _ in range(height)]
        for y in range(min(height, self.height)):
            keep = min(width, self.width)
            rows[y][:keep] = self._rows[y][:keep]
        self._rows = rows
        self.width, self.height = width, height

    def clear(self) -> None:
        self._rows = [[EMPTY_CELL] * self.width for _ in range(self.height)]

    def set(self, x: int, y: int, glyph: str, style: Style) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._rows[y][x] = (glyph, style)

    def get(self, x: int, y: int) -> Cell:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._rows[y][x]
        return EMPTY_CELL

    def row(self, y: int) -> list[Cell]:
        return list(self._rows[y]) if 0 <= y < self.height else []

    def text(self, y: int) -> str:
        """The glyphs of row *y* joined together, without styles."""
        return "".join(glyph for glyph, _ in self.row(y))


# ---------------------------------------------------------------------------
# Screen contract
# ---------------------------------------------------------------------------


class Screen(ABC):
    """
    Rendering and input surface consumed by the application.

    ``poll_event`` blocks until an event is available and returns ``None``
    once the screen has been finalised; that is how :meth:`fini` wakes and
    terminates a running event loop.
    """

    @abstractmethod
    def init(self) -> None:
        """Bring the surface up.  Raises on failure."""

    @abstractmethod
    def fini(self) -> None:
        """Tear the surface down and wake any blocked :meth:`poll_event`."""

    @abstractmethod
    def poll_event(self) -> Event | None:
        """Block for the next event; ``None`` after :meth:`fini`."""

    @abstractmethod
    def post_event(self, event: Event) -> None:
        """Queue an event as if the input source had produced it."""

    @abstractmethod
    def clear(self) -> None:
        """Erase the back buffer."""

    @abstractmethod
    def show(self) -> None:
        """Flush the back buffer to the display."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """``(width, height)`` in cells."""

    @abstractmethod
    def hide_cursor(self) -> None: ...

    @abstractmethod
    def show_cursor(self, x: int, y: int) -> None: ...

    @abstractmethod
    def set_content(self, x: int, y: int, glyph: str, style: Style) -> None: ...

    @abstractmethod
    def get_content(self, x: int, y: int) -> Cell: ...
