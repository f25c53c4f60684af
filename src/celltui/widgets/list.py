"""
Selectable list of items.

Each item has a main text, an optional secondary text shown underneath it,
an optional shortcut character and an optional callback fired when the
item is selected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from celltui.box import Widget
from celltui.events import CharacterEvent, KeyEvent
from celltui.primitive import Handler, RequestFocus, wrap_handler
from celltui.screen.base import Screen, Style
from celltui.text import ALIGN_LEFT, ALIGN_RIGHT, print_text, string_width
from celltui.theme import Theme

PAGE_SIZE = 5

ItemCallback = Callable[[int, str, str, str], None]
"""``callback(index, main_text, secondary_text, shortcut)``."""


@dataclass
class ListItem:
    main_text: str
    secondary_text: str = ""
    shortcut: str = ""
    selected: Callable[[], None] | None = None


class List(Widget):
    """
    Rows of items, one of which is current.

    Navigation wraps around at both ends.  Enter, space or an item's
    shortcut character selects; escape reports that the user is done.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self._items: list[ListItem] = []
        self._current = 0
        self._show_secondary_text = True
        self._main_text_color = self.theme.get("primary_text")
        self._secondary_text_color = self.theme.get("tertiary_text")
        self._shortcut_color = self.theme.get("secondary_text")
        self._selected_text_color = self.theme.get("primitive_background")
        self._selected_background_color = self.theme.get("primary_text")
        self._changed: ItemCallback | None = None
        self._selected: ItemCallback | None = None
        self._done: Callable[[], None] | None = None

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(
        self,
        main_text: str,
        secondary_text: str = "",
        shortcut: str = "",
        selected: Callable[[], None] | None = None,
    ) -> List:
        """
        Append an item.

        *shortcut* is a single character selecting the item directly, or
        ``""`` for none.  The changed callback fires for the first item.
        """
        self._items.append(ListItem(main_text, secondary_text, shortcut, selected))
        if len(self._items) == 1:
            self._notify_changed()
        return self

    def get_item(self, index: int) -> ListItem:
        return self._items[index]

    def get_item_count(self) -> int:
        return len(self._items)

    def clear(self) -> List:
        self._items = []
        self._current = 0
        return self

    def set_current_item(self, index: int) -> List:
        """Make *index* current; the changed callback fires."""
        self._current = index
        self._notify_changed()
        return self

    def get_current_item(self) -> int:
        return self._current

    # ------------------------------------------------------------------
    # Appearance
    # ------------------------------------------------------------------

    def show_secondary_text(self, show: bool) -> List:
        self._show_secondary_text = show
        return self

    def set_main_text_color(self, color: str) -> List:
        self._main_text_color = color
        return self

    def set_secondary_text_color(self, color: str) -> List:
        self._secondary_text_color = color
        return self

    def set_shortcut_color(self, color: str) -> List:
        self._shortcut_color = color
        return self

    def set_selected_text_color(self, color: str) -> List:
        self._selected_text_color = color
        return self

    def set_selected_background_color(self, color: str) -> List:
        self._selected_background_color = color
        return self

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def set_changed_func(self, handler: ItemCallback | None) -> List:
        """Called when the current item changes."""
        self._changed = handler
        return self

    def set_selected_func(self, handler: ItemCallback | None) -> List:
        """Called when an item is selected, after the item's own callback."""
        self._selected = handler
        return self

    def set_done_func(self, handler: Callable[[], None] | None) -> List:
        """Called when the user presses escape."""
        self._done = handler
        return self

    def _notify_changed(self) -> None:
        if self._changed is None or not 0 <= self._current < len(self._items):
            return
        item = self._items[self._current]
        self._changed(self._current, item.main_text, item.secondary_text, item.shortcut)

    def _select_current(self) -> None:
        if not 0 <= self._current < len(self._items):
            return
        item = self._items[self._current]
        if item.selected is not None:
            item.selected()
        if self._selected is not None:
            self._selected(self._current, item.main_text, item.secondary_text, item.shortcut)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def scroll_offset(self, height: int) -> int:
        """Index of the first visible item for a viewport *height* rows tall."""
        rows = height // 2 if self._show_secondary_text else height
        if rows > 0 and self._current >= rows:
            return self._current + 1 - rows
        return 0

    def draw(self, screen: Screen) -> None:
        self.box.draw(screen)

        x, y, width, height = self.get_inner_rect()
        bottom = y + height

        show_shortcuts = any(item.shortcut for item in self._items)
        if show_shortcuts:
            x += 4
            width -= 4

        offset = self.scroll_offset(height)
        for index, item in enumerate(self._items):
            if index < offset:
                continue
            if y >= bottom:
                break

            if show_shortcuts and item.shortcut:
                print_text(screen, f"({item.shortcut})", x - 5, y, 4, ALIGN_RIGHT, self._shortcut_color)

            print_text(screen, item.main_text, x, y, width, ALIGN_LEFT, self._main_text_color)

            if index == self._current:
                for bx in range(min(string_width(item.main_text), width)):
                    glyph, style = screen.get_content(x + bx, y)
                    fg = style.fg
                    if fg == self._main_text_color:
                        fg = self._selected_text_color
                    screen.set_content(x + bx, y, glyph, Style(fg=fg, bg=self._selected_background_color))

            y += 1
            if y >= bottom:
                break

            if self._show_secondary_text:
                print_text(screen, item.secondary_text, x, y, width, ALIGN_LEFT, self._secondary_text_color)
                y += 1

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def key_handler(self) -> Handler | None:
        return wrap_handler(self, self._handle_key)

    def character_handler(self) -> Handler | None:
        return wrap_handler(self, self._handle_character)

    def _handle_key(self, event: KeyEvent, request_focus: RequestFocus) -> None:
        previous = self._current
        code = event.code

        if code == "tab" and event.key.shift:
            self._current -= 1
        elif code in ("tab", "down", "right"):
            self._current += 1
        elif code in ("up", "left"):
            self._current -= 1
        elif code == "home":
            self._current = 0
        elif code == "end":
            self._current = len(self._items) - 1
        elif code == "page_down":
            self._current += PAGE_SIZE
        elif code == "page_up":
            self._current -= PAGE_SIZE
        elif code == "enter":
            self._select_current()
        elif code == "escape":
            if self._done is not None:
                self._done()

        self._wrap_around()
        if self._current != previous:
            self._notify_changed()

    def _handle_character(self, event: CharacterEvent, request_focus: RequestFocus) -> None:
        previous = self._current
        if event.rune != " ":
            for index, item in enumerate(self._items):
                if item.shortcut == event.rune:
                    self._current = index
                    break
            else:
                return
        self._select_current()
        if self._current != previous:
            self._notify_changed()

    def _wrap_around(self) -> None:
        if not self._items:
            self._current = 0
        elif self._current < 0:
            self._current = len(self._items) - 1
        elif self._current >= len(self._items):
            self._current = 0
