"""
Text measurement and printing helpers.

Stateless functions.  Widths are in terminal cells: East Asian wide and
fullwidth characters take two cells, combining marks and control
characters take none.  The right half of a wide glyph is stored as an
empty-string cell.
"""

from __future__ import annotations

import unicodedata

from celltui.screen.base import Screen

ALIGN_LEFT = 0
ALIGN_CENTER = 1
ALIGN_RIGHT = 2


def char_width(ch: str) -> int:
    """Display width of one character in cells."""
    o = ord(ch)
    if 0x20 <= o <= 0x7E:
        return 1
    if o < 0x20 or o == 0x7F:
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    if unicodedata.category(ch).startswith("M"):
        return 0
    return 1


def string_width(text: str) -> int:
    """Display width of *text* in cells."""
    return sum(char_width(ch) for ch in text)


def _take_width(text: str, max_width: int) -> str:
    """Longest prefix of *text* that fits in *max_width* cells."""
    width = 0
    for index, ch in enumerate(text):
        width += char_width(ch)
        if width > max_width:
            return text[:index]
    return text


def print_text(
    screen: Screen,
    text: str,
    x: int,
    y: int,
    max_width: int,
    align: int = ALIGN_LEFT,
    color: str | None = None,
) -> tuple[int, int]:
    """
    Print *text* at ``(x, y)`` within *max_width* cells.

    Text that does not fit is cut at the end (left alignment), at the
    start (right alignment) or on both sides (centre).  Each touched cell
    keeps its background and takes *color* as foreground.

    Returns ``(characters printed, cells used)``.
    """
    if max_width <= 0:
        return 0, 0

    total = string_width(text)
    if total > max_width:
        if align == ALIGN_RIGHT:
            text = _take_width(text[::-1], max_width)[::-1]
        elif align == ALIGN_CENTER:
            excess = total - max_width
            drop = 0
            start = 0
            while start < len(text) and drop < excess // 2:
                drop += char_width(text[start])
                start += 1
            text = _take_width(text[start:], max_width)
        else:
            text = _take_width(text, max_width)
        total = string_width(text)

    if align == ALIGN_RIGHT:
        x += max_width - total
    elif align == ALIGN_CENTER:
        x += (max_width - total) // 2

    col = x
    printed = 0
    for ch in text:
        w = char_width(ch)
        if w == 0:
            continue
        _, style = screen.get_content(col, y)
        if color is not None:
            style = style.foreground(color)
        screen.set_content(col, y, ch, style)
        if w == 2:
            screen.set_content(col + 1, y, "", style)
        col += w
        printed += 1
    return printed, total
