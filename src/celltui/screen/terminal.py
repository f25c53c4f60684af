"""
Terminal screen.

Drives a VT100-compatible terminal on a Unix tty: raw input mode, the
alternate screen, optional SGR mouse reporting and 24-bit colour output.

Input is read on a background thread, decoded into events and queued for
:meth:`TerminalScreen.poll_event`.  Output is differential: :meth:`show`
only rewrites rows that changed since the last flush, wrapped in
synchronized-output markers to avoid tearing.
"""

from __future__ import annotations

import os
import queue
import select
import signal
import sys
import termios
import threading
import tty
from io import StringIO
from typing import TextIO

from celltui import ansi
from celltui.config import ScreenConfig
from celltui.events import CharacterEvent, Event, KeyEvent, PointerEvent, PointerKind, ResizeEvent
from celltui.keys import KEY_UNKNOWN, parse_key, parse_mouse, split_sequences
from celltui.logging import get_logger
from celltui.screen.base import Cell, CellBuffer, Screen, Style

logger = get_logger("screen.terminal")

_FINI = object()
_RESIZE = object()

_WHEEL_BIT = 64


def translate_input(data: bytes) -> list[Event]:
    """
    Decode a raw input chunk into events.

    Printable keys produce a :class:`KeyEvent` press followed by a
    :class:`CharacterEvent`; mouse reports produce :class:`PointerEvent`.
    Terminals do not report key releases.
    """
    events: list[Event] = []
    for seq in split_sequences(data):
        report = parse_mouse(seq)
        if report is not None:
            events.append(_pointer_event(*report))
            continue
        key = parse_key(seq)
        if key is KEY_UNKNOWN:
            logger.debug("Ignoring undecodable input %r", seq)
            continue
        events.append(KeyEvent(key))
        if key.printable:
            events.append(CharacterEvent(key.char))
    return events


def _pointer_event(code: int, x: int, y: int, released: bool) -> PointerEvent:
    if code & _WHEEL_BIT:
        dy = -1 if code & 1 == 0 else 1
        return PointerEvent(PointerKind.SCROLL, x, y, dy=dy)
    low = code & 3
    button = 0 if low == 3 else low + 1
    pressed = button != 0 and not released
    return PointerEvent(PointerKind.CURSOR, x, y, button=button, pressed=pressed)


class TerminalScreen(Screen):
    """
    Screen on the controlling terminal.

    Parameters
    ----------
    config:
        Screen configuration.  Only the window title, ``mouse`` and
        ``alt_screen`` apply to a terminal; font and metric parameters are
        ignored.
    stdin, stdout:
        Streams to use instead of ``sys.stdin`` / ``sys.stdout``.  The input
        stream must be a tty.
    """

    def __init__(
        self,
        config: ScreenConfig | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._config = config or ScreenConfig()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._lock = threading.Lock()
        self._back = CellBuffer()
        self._front: list[list[Cell] | None] = []
        self._events: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._cursor: tuple[int, int] | None = None

        self._fd = -1
        self._saved_attrs: list | None = None
        self._wake_r = -1
        self._wake_w = -1
        self._reader: threading.Thread | None = None
        self._prev_sigwinch: object = None
        self._running = False
        self._finalised = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> None:
        self._fd = self._stdin.fileno()
        if not os.isatty(self._fd):
            raise OSError("standard input is not a terminal")

        self._saved_attrs = termios.tcgetattr(self._fd)
        try:
            tty.setraw(self._fd)
            self._wake_r, self._wake_w = os.pipe()
        except OSError:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            raise

        width, height = self._query_size()
        with self._lock:
            self._back.resize(width, height)
            self._front = [None] * height

        out = StringIO()
        if self._config.alt_screen:
            out.write(ansi.enter_alt_screen())
        out.write(ansi.hide_cursor())
        out.write(ansi.clear_screen())
        if self._config.mouse:
            out.write(ansi.enable_mouse())
        if self._config.window.title:
            out.write(ansi.set_title(self._config.window.title))
        self._write(out.getvalue())

        if threading.current_thread() is threading.main_thread() and self._prev_sigwinch is None:
            self._prev_sigwinch = signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._running = True
        self._finalised = False
        self._reader = threading.Thread(target=self._read_loop, name="celltui-input", daemon=True)
        self._reader.start()
        logger.debug("Terminal screen initialised at %dx%d", width, height)

    def fini(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False

        try:
            os.write(self._wake_w, b"x")
            if self._reader is not None and self._reader is not threading.current_thread():
                self._reader.join(timeout=1.0)

            # signal.signal() only works on the main thread; elsewhere the
            # handler stays installed and finds the screen finalised.
            if self._prev_sigwinch is not None and threading.current_thread() is threading.main_thread():
                signal.signal(signal.SIGWINCH, self._prev_sigwinch)  # type: ignore[arg-type]
                self._prev_sigwinch = None

            out = StringIO()
            if self._config.mouse:
                out.write(ansi.disable_mouse())
            out.write(ansi.RESET)
            out.write(ansi.show_cursor())
            if self._config.alt_screen:
                out.write(ansi.exit_alt_screen())
            self._write(out.getvalue())
        finally:
            try:
                if self._saved_attrs is not None:
                    termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
                    self._saved_attrs = None
            finally:
                for fd in (self._wake_r, self._wake_w):
                    os.close(fd)
                self._wake_r = self._wake_w = -1
                self._events.put(_FINI)
        logger.debug("Terminal screen finalised")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def poll_event(self) -> Event | None:
        if self._finalised:
            return None
        item = self._events.get()
        if item is _FINI:
            self._finalised = True
            return None
        if item is _RESIZE:
            return self._apply_resize()
        return item  # type: ignore[return-value]

    def post_event(self, event: Event) -> None:
        self._events.put(event)

    def _read_loop(self) -> None:
        while True:
            try:
                ready, _, _ = select.select([self._fd, self._wake_r], [], [])
            except InterruptedError:
                continue
            if self._wake_r in ready:
                return
            try:
                data = os.read(self._fd, 4096)
            except OSError as exc:
                logger.error("Terminal input failed: %s", exc)
                self._events.put(_FINI)
                return
            if not data:
                # Hang-up: wake the loop so it can shut down.
                self._events.put(_FINI)
                return
            for event in translate_input(data):
                self._events.put(event)

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        # Runs on the main thread between bytecodes: no locks, only the
        # reentrant SimpleQueue.put().
        self._events.put(_RESIZE)

    def _apply_resize(self) -> ResizeEvent:
        width, height = self._query_size()
        with self._lock:
            self._back.resize(width, height)
            self._front = [None] * height
        return ResizeEvent(width, height)

    def _query_size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self._stdout.fileno())
        except (OSError, ValueError):
            size = os.terminal_size((80, 24))
        return size.columns, size.lines

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def clear(self) -> None:
        with self._lock:
            self._back.clear()
            self._front = [None] * self._back.height

    def show(self) -> None:
        with self._lock:
            if not self._running:
                return
            updates: list[tuple[int, list[Cell]]] = []
            for y in range(self._back.height):
                row = self._back.row(y)
                if self._front[y] != row:
                    updates.append((y, row))
                    self._front[y] = row
            cursor = self._cursor

        buf = StringIO()
        buf.write(ansi.SYNC_START)
        buf.write(ansi.hide_cursor())
        for y, row in updates:
            buf.write(ansi.cursor_position(y + 1, 1))
            buf.write(_render_row(row))
        buf.write(ansi.RESET)
        if cursor is not None:
            buf.write(ansi.cursor_position(cursor[1] + 1, cursor[0] + 1))
            buf.write(ansi.show_cursor())
        buf.write(ansi.SYNC_END)
        self._write(buf.getvalue())

    def size(self) -> tuple[int, int]:
        with self._lock:
            return self._back.width, self._back.height

    def hide_cursor(self) -> None:
        with self._lock:
            self._cursor = None

    def show_cursor(self, x: int, y: int) -> None:
        with self._lock:
            self._cursor = (x, y)

    def set_content(self, x: int, y: int, glyph: str, style: Style) -> None:
        with self._lock:
            self._back.set(x, y, glyph, style)

    def get_content(self, x: int, y: int) -> Cell:
        with self._lock:
            return self._back.get(x, y)

    def _write(self, data: str) -> None:
        self._stdout.write(data)
        self._stdout.flush()


def _render_row(row: list[Cell]) -> str:
    """Serialise one row, emitting SGR only where the style changes."""
    out = StringIO()
    current: Style | None = None
    for glyph, style in row:
        if not glyph:
            # Right half of a wide glyph.
            continue
        if style != current:
            out.write(
                ansi.sgr(
                    fg=style.fg,
                    bg=style.bg,
                    bold=style.bold,
                    underline=style.underline,
                    reverse=style.reverse,
                )
            )
            current = style
        out.write(glyph)
    return out.getvalue()
