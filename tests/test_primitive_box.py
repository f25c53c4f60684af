"""Tests for the focus guard, Box and the Widget composition base."""

from __future__ import annotations

from celltui.box import BORDER_DOUBLE, BORDER_SINGLE, Box, Widget
from celltui.events import KeyEvent
from celltui.keys import rune_key
from celltui.primitive import RequestFocus, wrap_handler
from celltui.screen import SimulationScreen, Style
from celltui.theme import Theme, get_default_theme


def noop_focus(primitive) -> None:
    pass


class TestWrapHandler:
    def test_runs_only_while_focused(self) -> None:
        box = Box()
        seen: list[KeyEvent] = []

        def handler(event: KeyEvent, request_focus: RequestFocus) -> None:
            seen.append(event)

        guarded = wrap_handler(box, handler)
        event = KeyEvent(rune_key("a"))

        guarded(event, noop_focus)
        assert seen == []

        box.focus(noop_focus)
        guarded(event, noop_focus)
        assert seen == [event]

        box.blur()
        guarded(event, noop_focus)
        assert seen == [event]

    def test_preserves_name(self) -> None:
        def handle_keys(event: KeyEvent, request_focus: RequestFocus) -> None:
            pass

        assert wrap_handler(Box(), handle_keys).__name__ == "handle_keys"


class TestBox:
    """Tests for Box geometry, styling and drawing."""

    def test_defaults(self) -> None:
        box = Box()

        assert box.get_rect() == (0, 0, 15, 10)
        assert box.has_border() is False
        assert box.get_title() == ""
        assert box.has_focus() is False
        assert box.get_background_color() == get_default_theme()["primitive_background"]

    def test_inner_rect_with_border(self) -> None:
        box = Box()
        box.set_rect(2, 3, 10, 5)
        assert box.get_inner_rect() == (2, 3, 10, 5)

        box.set_border(True)
        assert box.get_inner_rect() == (3, 4, 8, 3)

    def test_inner_rect_never_negative(self) -> None:
        box = Box().set_border(True)
        box.set_rect(0, 0, 1, 1)
        assert box.get_inner_rect() == (1, 1, 0, 0)

    def test_in_rect(self) -> None:
        box = Box()
        box.set_rect(2, 2, 3, 3)

        assert box.in_rect(2, 2) is True
        assert box.in_rect(4, 4) is True
        assert box.in_rect(5, 4) is False
        assert box.in_rect(1, 3) is False

    def test_theme_colours(self) -> None:
        theme = Theme(colors={"primitive_background": "#111111", "border": "#222222", "title": "#333333"})
        box = Box(theme)
        assert box.get_background_color() == "#111111"

    def test_draw_fills_background(self) -> None:
        screen = SimulationScreen(5, 3)
        box = Box().set_background_color("#101010")
        box.set_rect(1, 1, 2, 1)

        box.draw(screen)

        assert screen.get_content(1, 1) == (" ", Style(bg="#101010"))
        assert screen.get_content(2, 1) == (" ", Style(bg="#101010"))
        assert screen.get_content(0, 0) == (" ", Style())

    def test_draw_border_and_title(self) -> None:
        screen = SimulationScreen(10, 3)
        box = Box().set_border(True).set_title("Hi")
        box.set_rect(0, 0, 10, 3)

        box.draw(screen)

        top = "".join(screen.get_content(x, 0)[0] for x in range(10))
        assert top[0] == BORDER_SINGLE[2]
        assert top[-1] == BORDER_SINGLE[3]
        assert "Hi" in top
        assert screen.get_content(0, 1)[0] == BORDER_SINGLE[1]
        assert screen.get_content(0, 2)[0] == BORDER_SINGLE[4]

    def test_focused_border_is_double(self) -> None:
        screen = SimulationScreen(4, 3)
        box = Box().set_border(True)
        box.set_rect(0, 0, 4, 3)
        box.focus(noop_focus)

        box.draw(screen)

        assert screen.get_content(0, 0)[0] == BORDER_DOUBLE[2]

    def test_setters_chain(self) -> None:
        box = Box()
        assert box.set_border(True).set_title("t").set_title_align(0).set_border_color("#fff") is box


class TestWidget:
    def test_delegates_to_box(self) -> None:
        widget = Widget()
        widget.set_rect(1, 2, 3, 4)
        widget.focus(noop_focus)

        assert widget.get_rect() == (1, 2, 3, 4)
        assert widget.box.get_rect() == (1, 2, 3, 4)
        assert widget.has_focus() is True
        assert widget.box.has_focus() is True

        widget.blur()
        assert widget.has_focus() is False

    def test_theme_is_shared_with_box(self) -> None:
        theme = get_default_theme()
        widget = Widget(theme)
        assert widget.theme is theme
        assert widget.box.theme is theme

    def test_handlers_default_to_none(self) -> None:
        widget = Widget()
        assert widget.key_handler() is None
        assert widget.mouse_handler() is None
        assert widget.character_handler() is None
