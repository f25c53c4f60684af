"""
In-memory screen.

Holds a cell buffer and a scripted event queue instead of talking to a
terminal.  Used for headless runs and throughout the test-suite; the
counters make the application's calls into the screen observable.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterable

from celltui.events import Event, ResizeEvent
from celltui.screen.base import Cell, CellBuffer, Screen, Style

_FINI = object()


class SimulationScreen(Screen):
    """
    Screen backed by memory.

    Parameters
    ----------
    width, height:
        Initial size in cells.
    init_error:
        If given, :meth:`init` raises it, simulating a surface that cannot
        be brought up.
    """

    def __init__(
        self,
        width: int = 80,
        height: int = 25,
        init_error: Exception | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._back = CellBuffer(width, height)
        self._front = CellBuffer(width, height)
        self._events: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._init_error = init_error
        self._finalised = False

        self.cursor: tuple[int, int] | None = None
        self.init_count = 0
        self.fini_count = 0
        self.show_count = 0
        self.clear_count = 0

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    def inject(self, event: Event | None) -> None:
        """
        Queue *event* for :meth:`poll_event`.

        ``None`` queues the shutdown sentinel: the poll that reaches it
        returns ``None`` exactly as after :meth:`fini`.
        """
        self._events.put(_FINI if event is None else event)

    def inject_many(self, events: Iterable[Event | None]) -> None:
        for event in events:
            self.inject(event)

    def set_size(self, width: int, height: int) -> None:
        """Resize the buffers without queueing a :class:`ResizeEvent`."""
        with self._lock:
            self._back.resize(width, height)
            self._front.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Queue a :class:`ResizeEvent`; the size changes when it is polled."""
        self.inject(ResizeEvent(width, height))

    def text_at(self, y: int) -> str:
        """Row *y* of the last flushed frame, glyphs only."""
        with self._lock:
            return self._front.text(y)

    def cell_at(self, x: int, y: int) -> Cell:
        """Cell of the last flushed frame."""
        with self._lock:
            return self._front.get(x, y)

    @property
    def finalised(self) -> bool:
        return self._finalised

    # ------------------------------------------------------------------
    # Screen contract
    # ------------------------------------------------------------------

    def init(self) -> None:
        self.init_count += 1
        if self._init_error is not None:
            raise self._init_error
        self._finalised = False

    def fini(self) -> None:
        self.fini_count += 1
        self._finalised = True
        self._events.put(_FINI)

    def poll_event(self) -> Event | None:
        if self._finalised:
            return None
        item = self._events.get()
        if item is _FINI:
            self._finalised = True
            return None
        if isinstance(item, ResizeEvent):
            self.set_size(item.width, item.height)
        return item  # type: ignore[return-value]

    def post_event(self, event: Event) -> None:
        self._events.put(event)

    def clear(self) -> None:
        self.clear_count += 1
        with self._lock:
            self._back.clear()

    def show(self) -> None:
        self.show_count += 1
        with self._lock:
            for y in range(self._back.height):
                for x in range(self._back.width):
                    glyph, style = self._back.get(x, y)
                    self._front.set(x, y, glyph, style)

    def size(self) -> tuple[int, int]:
        with self._lock:
            return self._back.width, self._back.height

    def hide_cursor(self) -> None:
        self.cursor = None

    def show_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def set_content(self, x: int, y: int, glyph: str, style: Style) -> None:
        with self._lock:
            self._back.set(x, y, glyph, style)

    def get_content(self, x: int, y: int) -> Cell:
        with self._lock:
            return self._back.get(x, y)
