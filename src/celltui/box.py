"""
Box: the geometry, border and title state shared by all widgets.

Widgets do not inherit from :class:`Box`; they hold one.  :class:`Widget`
is the base for such composites and forwards geometry and focus calls to
its box, so a concrete widget only overrides what differs (usually
``draw`` and the handlers).
"""

from __future__ import annotations

from celltui.primitive import Primitive, RequestFocus
from celltui.screen.base import STYLE_DEFAULT, Screen
from celltui.text import ALIGN_CENTER, print_text
from celltui.theme import Theme, get_default_theme

# Border glyphs: (horizontal, vertical, top-left, top-right, bottom-left, bottom-right)
BORDER_SINGLE = ("─", "│", "┌", "┐", "└", "┘")
BORDER_DOUBLE = ("═", "║", "╔", "╗", "╚", "╝")


class Box(Primitive):
    """
    A rectangle with an optional border and title.

    The default :meth:`draw` fills the rectangle with the background colour,
    then paints the border (double lines while focused) and the title on
    the top border.

    Parameters
    ----------
    theme:
        Colour table; defaults to a copy of the built-in theme.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme or get_default_theme()
        self._x = 0
        self._y = 0
        self._width = 15
        self._height = 10
        self._border = False
        self._title = ""
        self._title_align = ALIGN_CENTER
        self._background_color = self.theme.get("primitive_background")
        self._border_color = self.theme.get("border")
        self._title_color = self.theme.get("title")
        self._focused = False

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def get_rect(self) -> tuple[int, int, int, int]:
        return self._x, self._y, self._width, self._height

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        self._x, self._y, self._width, self._height = x, y, width, height

    def get_inner_rect(self) -> tuple[int, int, int, int]:
        if not self._border:
            return self.get_rect()
        return self._x + 1, self._y + 1, max(0, self._width - 2), max(0, self._height - 2)

    def in_rect(self, x: int, y: int) -> bool:
        """Whether the cell ``(x, y)`` lies inside this box."""
        return self._x <= x < self._x + self._width and self._y <= y < self._y + self._height

    # ------------------------------------------------------------------
    # Style
    # ------------------------------------------------------------------

    def set_border(self, show: bool) -> Box:
        self._border = show
        return self

    def has_border(self) -> bool:
        return self._border

    def set_title(self, title: str) -> Box:
        self._title = title
        return self

    def get_title(self) -> str:
        return self._title

    def set_title_align(self, align: int) -> Box:
        self._title_align = align
        return self

    def set_background_color(self, color: str) -> Box:
        self._background_color = color
        return self

    def get_background_color(self) -> str:
        return self._background_color

    def set_border_color(self, color: str) -> Box:
        self._border_color = color
        return self

    def set_title_color(self, color: str) -> Box:
        self._title_color = color
        return self

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def focus(self, request_focus: RequestFocus) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    def has_focus(self) -> bool:
        return self._focused

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, screen: Screen) -> None:
        if self._width <= 0 or self._height <= 0:
            return

        background = STYLE_DEFAULT.background(self._background_color)
        for y in range(self._y, self._y + self._height):
            for x in range(self._x, self._x + self._width):
                screen.set_content(x, y, " ", background)

        if not self._border or self._width < 2 or self._height < 2:
            return

        horizontal, vertical, top_left, top_right, bottom_left, bottom_right = (
            BORDER_DOUBLE if self._focused else BORDER_SINGLE
        )
        style = background.foreground(self._border_color)
        right = self._x + self._width - 1
        bottom = self._y + self._height - 1
        for x in range(self._x + 1, right):
            screen.set_content(x, self._y, horizontal, style)
            screen.set_content(x, bottom, horizontal, style)
        for y in range(self._y + 1, bottom):
            screen.set_content(self._x, y, vertical, style)
            screen.set_content(right, y, vertical, style)
        screen.set_content(self._x, self._y, top_left, style)
        screen.set_content(right, self._y, top_right, style)
        screen.set_content(self._x, bottom, bottom_left, style)
        screen.set_content(right, bottom, bottom_right, style)

        if self._title and self._width >= 4:
            print_text(
                screen,
                self._title,
                self._x + 1,
                self._y,
                self._width - 2,
                self._title_align,
                self._title_color,
            )


class Widget(Primitive):
    """
    Base for widgets built around a :class:`Box`.

    Geometry, border/title settings and the focus flag live in
    ``self.box``; the default :meth:`draw` paints just the box.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        self.box = Box(theme)

    @property
    def theme(self) -> Theme:
        return self.box.theme

    def draw(self, screen: Screen) -> None:
        self.box.draw(screen)

    def get_rect(self) -> tuple[int, int, int, int]:
        return self.box.get_rect()

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        self.box.set_rect(x, y, width, height)

    def get_inner_rect(self) -> tuple[int, int, int, int]:
        return self.box.get_inner_rect()

    def focus(self, request_focus: RequestFocus) -> None:
        self.box.focus(request_focus)

    def blur(self) -> None:
        self.box.blur()

    def has_focus(self) -> bool:
        return self.box.has_focus()
