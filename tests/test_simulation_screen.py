"""Tests for the in-memory screen and the cell buffer."""

from __future__ import annotations

import threading

import pytest

from celltui.config import ScreenConfig
from celltui.events import KeyEvent, ResizeEvent
from celltui.keys import rune_key
from celltui.screen import EMPTY_CELL, CellBuffer, SimulationScreen, Style, new_screen


class TestCellBuffer:
    def test_out_of_range_is_ignored(self) -> None:
        buf = CellBuffer(3, 2)
        buf.set(5, 5, "x", Style())

        assert buf.get(5, 5) == EMPTY_CELL
        assert buf.row(9) == []

    def test_resize_keeps_overlap(self) -> None:
        buf = CellBuffer(3, 2)
        buf.set(0, 0, "a", Style())
        buf.set(2, 1, "b", Style())

        buf.resize(2, 3)

        assert buf.text(0) == "a "
        assert buf.text(1) == "  "
        assert buf.height == 3

    def test_clear(self) -> None:
        buf = CellBuffer(2, 1)
        buf.set(0, 0, "a", Style(fg="#ffffff"))
        buf.clear()

        assert buf.get(0, 0) == EMPTY_CELL


class TestSimulationScreen:
    """Tests for SimulationScreen."""

    def test_events_come_back_in_order(self) -> None:
        screen = SimulationScreen()
        first, second = KeyEvent(rune_key("a")), KeyEvent(rune_key("b"))
        screen.inject_many([first, second])

        assert screen.poll_event() == first
        assert screen.poll_event() == second

    def test_none_sentinel_finalises(self) -> None:
        screen = SimulationScreen()
        screen.inject(None)

        assert screen.poll_event() is None
        assert screen.finalised is True
        assert screen.poll_event() is None

    def test_fini_wakes_blocked_poll(self) -> None:
        screen = SimulationScreen()
        screen.init()
        results: list[object] = []
        thread = threading.Thread(target=lambda: results.append(screen.poll_event()))
        thread.start()

        screen.fini()
        thread.join(timeout=2.0)

        assert results == [None]
        assert screen.fini_count == 1

    def test_resize_applies_when_polled(self) -> None:
        screen = SimulationScreen(10, 5)
        screen.resize(20, 8)

        assert screen.size() == (10, 5)
        assert screen.poll_event() == ResizeEvent(20, 8)
        assert screen.size() == (20, 8)

    def test_show_copies_back_to_front(self) -> None:
        screen = SimulationScreen(4, 1)
        screen.set_content(1, 0, "x", Style())

        assert screen.text_at(0) == "    "
        screen.show()
        assert screen.text_at(0) == " x  "
        assert screen.cell_at(1, 0) == ("x", Style())
        assert screen.show_count == 1

    def test_clear_erases_back_buffer(self) -> None:
        screen = SimulationScreen(2, 1)
        screen.set_content(0, 0, "x", Style())
        screen.clear()

        assert screen.get_content(0, 0) == EMPTY_CELL
        assert screen.clear_count == 1

    def test_init_error(self) -> None:
        screen = SimulationScreen(init_error=OSError("nope"))
        with pytest.raises(OSError, match="nope"):
            screen.init()
        assert screen.init_count == 1

    def test_cursor(self) -> None:
        screen = SimulationScreen()
        screen.show_cursor(2, 3)
        assert screen.cursor == (2, 3)
        screen.hide_cursor()
        assert screen.cursor is None


class TestNewScreen:
    def test_simulation_backend(self) -> None:
        screen = new_screen(ScreenConfig(backend="simulation"))
        assert isinstance(screen, SimulationScreen)
        assert screen.size() == (80, 25)
