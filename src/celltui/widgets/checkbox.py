"""A single toggle with a label."""

from __future__ import annotations

from collections.abc import Callable

from celltui.box import Widget
from celltui.events import KeyEvent
from celltui.keys import Key
from celltui.primitive import Handler, RequestFocus, wrap_handler
from celltui.screen.base import STYLE_DEFAULT, Screen
from celltui.text import ALIGN_LEFT, print_text
from celltui.theme import Theme

CHECKED_GLYPH = "X"


class Checkbox(Widget):
    """
    A label followed by a one-cell field showing ``X`` when checked.

    Space or enter toggles the state; tab and escape report that the user
    is done.  The field colours are inverted while focused.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self._checked = False
        self._label = ""
        self._label_color = self.theme.get("secondary_text")
        self._field_background_color = self.theme.get("contrast_background")
        self._field_text_color = self.theme.get("primary_text")
        self._changed: Callable[[bool], None] | None = None
        self._done: Callable[[Key], None] | None = None

    def set_checked(self, checked: bool) -> Checkbox:
        """Set the state without firing the changed callback."""
        self._checked = checked
        return self

    def is_checked(self) -> bool:
        return self._checked

    def set_label(self, label: str) -> Checkbox:
        self._label = label
        return self

    def get_label(self) -> str:
        return self._label

    def set_label_color(self, color: str) -> Checkbox:
        self._label_color = color
        return self

    def set_field_background_color(self, color: str) -> Checkbox:
        self._field_background_color = color
        return self

    def set_field_text_color(self, color: str) -> Checkbox:
        self._field_text_color = color
        return self

    def get_field_width(self) -> int:
        return 1

    def set_changed_func(self, handler: Callable[[bool], None] | None) -> Checkbox:
        """Called with the new state when the user toggles the box."""
        self._changed = handler
        return self

    def set_done_func(self, handler: Callable[[Key], None] | None) -> Checkbox:
        self._done = handler
        return self

    def draw(self, screen: Screen) -> None:
        self.box.draw(screen)

        x, y, width, height = self.get_inner_rect()
        right = x + width
        if height < 1 or right <= x:
            return

        _, drawn = print_text(screen, self._label, x, y, right - x, ALIGN_LEFT, self._label_color)
        x += drawn
        if x >= right:
            return

        if self.has_focus():
            style = STYLE_DEFAULT.background(self._field_text_color).foreground(self._field_background_color)
        else:
            style = STYLE_DEFAULT.background(self._field_background_color).foreground(self._field_text_color)
        screen.set_content(x, y, CHECKED_GLYPH if self._checked else " ", style)

    def key_handler(self) -> Handler | None:
        return wrap_handler(self, self._handle_key)

    def _handle_key(self, event: KeyEvent, request_focus: RequestFocus) -> None:
        if event.code in ("enter", "space"):
            self._checked = not self._checked
            if self._changed is not None:
                self._changed(self._checked)
        elif event.code in ("tab", "escape"):
            if self._done is not None:
                self._done(event.key)
