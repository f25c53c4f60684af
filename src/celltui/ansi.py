"""
ANSI escape sequence utilities for the terminal back-end.

Cursor control, screen modes, mouse reporting and SGR colour sequences.
Colours are hex strings (``"#rrggbb"``) as used by themes.
"""

from __future__ import annotations

ESC = "\033"
CSI = f"{ESC}["
OSC = f"{ESC}]"
RESET = f"{CSI}0m"

# Synchronized output markers (DEC private mode 2026)
SYNC_START = f"{CSI}?2026h"
SYNC_END = f"{CSI}?2026l"


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``"#rgb"`` / ``"#rrggbb"`` (``#`` optional) to an ``(r, g, b)`` tuple."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


_ATTR_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "reverse": 7,
}


def sgr(
    *,
    fg: str | None = None,
    bg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
    reverse: bool = False,
) -> str:
    """
    Build a single SGR sequence selecting the given colours and attributes.

    The sequence always starts from a reset, so consecutive cells never
    inherit attributes from each other.  ``None`` colours mean the
    terminal default.
    """
    codes: list[str] = ["0"]
    if fg:
        r, g, b = hex_to_rgb(fg)
        codes.append(f"38;2;{r};{g};{b}")
    if bg:
        r, g, b = hex_to_rgb(bg)
        codes.append(f"48;2;{r};{g};{b}")
    flags = {"bold": bold, "dim": dim, "italic": italic, "underline": underline, "reverse": reverse}
    for name, enabled in flags.items():
        if enabled:
            codes.append(str(_ATTR_CODES[name]))
    return f"{CSI}{';'.join(codes)}m"


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def enter_alt_screen() -> str:
    return f"{CSI}?1049h"


def exit_alt_screen() -> str:
    return f"{CSI}?1049l"


def enable_mouse() -> str:
    """Enable button, drag and motion reporting in SGR encoding."""
    return f"{CSI}?1003h{CSI}?1006h"


def disable_mouse() -> str:
    return f"{CSI}?1003l{CSI}?1006l"


def set_title(title: str) -> str:
    """Set the terminal window title via OSC 2."""
    return f"{OSC}2;{title}{ESC}\\"
