"""
One-line text entry.

Typed text arrives as :class:`~celltui.events.CharacterEvent`; editing and
navigation keys (backspace, enter, tab, escape) arrive as
:class:`~celltui.events.KeyEvent`.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from celltui.box import Widget
from celltui.events import CharacterEvent, KeyEvent
from celltui.keys import Key
from celltui.primitive import Handler, RequestFocus, wrap_handler
from celltui.screen.base import STYLE_DEFAULT, Screen
from celltui.text import ALIGN_LEFT, ALIGN_RIGHT, print_text, string_width
from celltui.theme import Theme

AcceptFunc = Callable[[str, str], bool]
"""``accept(text_after_change, last_character) -> bool``."""

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_DONE_KEYS = frozenset({"enter", "tab", "escape"})


def accept_integer(text: str, ch: str) -> bool:
    """Accept text that is (on its way to being) an integer."""
    return text in ("-", "+") or _INTEGER_RE.fullmatch(text) is not None


def accept_float(text: str, ch: str) -> bool:
    """Accept text that is (on its way to being) a decimal number."""
    return text in ("-", "+", ".", "-.", "+.") or _FLOAT_RE.fullmatch(text) is not None


def accept_max_length(max_length: int) -> AcceptFunc:
    """Build an acceptance function limiting the text to *max_length* characters."""

    def accept(text: str, ch: str) -> bool:
        return len(text) <= max_length

    return accept


class InputField(Widget):
    """
    A label followed by an input area.

    Set a mask character to hide the entered text (passwords), an acceptance
    function to reject characters, and a field width to limit the input
    area (0 extends it to the right edge).
    """

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self._text = ""
        self._label = ""
        self._placeholder = ""
        self._label_color = self.theme.get("secondary_text")
        self._field_background_color = self.theme.get("contrast_background")
        self._field_text_color = self.theme.get("primary_text")
        self._placeholder_color = self.theme.get("contrast_secondary_text")
        self._field_width = 0
        self._mask = ""
        self._accept: AcceptFunc | None = None
        self._changed: Callable[[str], None] | None = None
        self._done: Callable[[Key], None] | None = None

    def set_text(self, text: str) -> InputField:
        """Replace the text; the changed callback fires."""
        self._text = text
        if self._changed is not None:
            self._changed(text)
        return self

    def get_text(self) -> str:
        return self._text

    def set_label(self, label: str) -> InputField:
        self._label = label
        return self

    def get_label(self) -> str:
        return self._label

    def set_placeholder(self, text: str) -> InputField:
        self._placeholder = text
        return self

    def set_label_color(self, color: str) -> InputField:
        self._label_color = color
        return self

    def set_field_background_color(self, color: str) -> InputField:
        self._field_background_color = color
        return self

    def set_field_text_color(self, color: str) -> InputField:
        self._field_text_color = color
        return self

    def set_placeholder_color(self, color: str) -> InputField:
        self._placeholder_color = color
        return self

    def set_field_width(self, width: int) -> InputField:
        self._field_width = width
        return self

    def get_field_width(self) -> int:
        return self._field_width

    def set_mask_character(self, mask: str) -> InputField:
        """Show every entered character as *mask*; ``""`` disables masking."""
        self._mask = mask
        return self

    def set_acceptance_func(self, accept: AcceptFunc | None) -> InputField:
        self._accept = accept
        return self

    def set_changed_func(self, handler: Callable[[str], None] | None) -> InputField:
        """Called with the new text whenever it changes."""
        self._changed = handler
        return self

    def set_done_func(self, handler: Callable[[Key], None] | None) -> InputField:
        """
        Called when the user leaves the field.

        Receives the key that was pressed: enter, escape, tab or shift+tab.
        """
        self._done = handler
        return self

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, screen: Screen) -> None:
        self.box.draw(screen)

        x, y, width, height = self.get_inner_rect()
        right = x + width
        if height < 1 or right <= x:
            return

        _, drawn = print_text(screen, self._label, x, y, right - x, ALIGN_LEFT, self._label_color)
        x += drawn

        field_width = right - x
        if self._field_width > 0:
            field_width = min(field_width, self._field_width)
        field_style = STYLE_DEFAULT.background(self._field_background_color)
        for index in range(field_width):
            screen.set_content(x + index, y, " ", field_style)

        if not self._text and self._placeholder:
            print_text(screen, self._placeholder, x, y, field_width, ALIGN_LEFT, self._placeholder_color)

        text = self._mask * len(self._text) if self._mask else self._text
        # The last cell is kept free for the cursor.
        text_width = field_width - 1
        align = ALIGN_RIGHT if string_width(text) > text_width else ALIGN_LEFT
        print_text(screen, text, x, y, text_width, align, self._field_text_color)

        if self.has_focus():
            cursor = x + max(0, min(string_width(text), text_width))
            screen.show_cursor(min(cursor, right - 1), y)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def key_handler(self) -> Handler | None:
        return wrap_handler(self, self._handle_key)

    def character_handler(self) -> Handler | None:
        return wrap_handler(self, self._handle_character)

    def _handle_key(self, event: KeyEvent, request_focus: RequestFocus) -> None:
        if event.code == "backspace":
            if self._text:
                self.set_text(self._text[:-1])
        elif event.code in _DONE_KEYS:
            if self._done is not None:
                self._done(event.key)

    def _handle_character(self, event: CharacterEvent, request_focus: RequestFocus) -> None:
        text = self._text + event.rune
        if self._accept is not None and not self._accept(text, event.rune):
            return
        self.set_text(text)
