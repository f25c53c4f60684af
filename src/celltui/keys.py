"""
Key decoding for terminal input.

Turns the raw bytes a terminal delivers on stdin into ``Key`` values and
pointer reports.  A single ``read()`` may return several keys at once (fast
typing, pastes, mouse drags), so :func:`split_sequences` first cuts a chunk
into one sequence per key before :func:`parse_key` / :func:`parse_mouse`
decode each piece.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """
    A decoded key.

    Attributes
    ----------
    name:
        Symbolic name for special keys (``'enter'``, ``'up'``, ``'ctrl+c'``).
        For printable characters this equals *char*.
    char:
        The literal character for printable keys, otherwise ``""``.
    ctrl, alt, shift:
        Modifier state, as far as the terminal reports it.
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def printable(self) -> bool:
        """Whether this key inserts a character when typed."""
        return bool(self.char) and self.char.isprintable() and not (self.ctrl or self.alt)

    def descriptor(self) -> str:
        """
        Canonical ``mod+mod+base`` descriptor used by key bindings.

        >>> Key(name="ctrl+c", char="c", ctrl=True).descriptor()
        'ctrl+c'
        >>> Key(name="tab", char="\\t", shift=True).descriptor()
        'shift+tab'
        """
        mods = [m for m, on in (("alt", self.alt), ("ctrl", self.ctrl), ("shift", self.shift)) if on]
        base = self.name
        if len(base) > 1 and "+" in base:
            base = base.rsplit("+", 1)[-1]
        return "+".join(sorted(mods) + [base.lower()])


# ---------------------------------------------------------------------------
# Common keys
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_BACKTAB = Key(name="tab", char="\t", shift=True)
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_INSERT = Key(name="insert")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")

KEY_CTRL_C = Key(name="ctrl+c", char="c", ctrl=True)

KEY_UNKNOWN = Key(name="unknown")

_FUNCTION_KEYS = {n: Key(name=f"f{n}") for n in range(1, 13)}


def rune_key(ch: str) -> Key:
    """Return the key for a single printable character."""
    if ch == " ":
        return KEY_SPACE
    return Key(name=ch, char=ch)


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# CSI <final>
_CSI_FINAL: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": KEY_BACKTAB,
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    11: _FUNCTION_KEYS[1],
    12: _FUNCTION_KEYS[2],
    13: _FUNCTION_KEYS[3],
    14: _FUNCTION_KEYS[4],
    15: _FUNCTION_KEYS[5],
    17: _FUNCTION_KEYS[6],
    18: _FUNCTION_KEYS[7],
    19: _FUNCTION_KEYS[8],
    20: _FUNCTION_KEYS[9],
    21: _FUNCTION_KEYS[10],
    23: _FUNCTION_KEYS[11],
    24: _FUNCTION_KEYS[12],
}

# ESC O <letter>
_SS3: dict[str, Key] = {
    "P": _FUNCTION_KEYS[1],
    "Q": _FUNCTION_KEYS[2],
    "R": _FUNCTION_KEYS[3],
    "S": _FUNCTION_KEYS[4],
    "H": KEY_HOME,
    "F": KEY_END,
}

_CTRL_PUNCTUATION: dict[int, str] = {0x1C: "\\", 0x1D: "]", 0x1E: "^", 0x1F: "_"}

# One complete sequence at the start of a buffer: CSI (incl. SGR mouse),
# SS3, ESC + one char, or a bare ESC.
_SEQUENCE_RE = re.compile(rb"\x1b(?:\[[\x30-\x3f]*[\x20-\x2f]*[\x40-\x7e]|O.|[^\[O])|\x1b")

_SGR_MOUSE_RE = re.compile(rb"\x1b\[<(\d+);(\d+);(\d+)([Mm])")


def _with_modifiers(base: Key, code: int) -> Key:
    """Apply an xterm ``;N`` modifier code (``1 + shift + 2*alt + 4*ctrl``)."""
    bits = code - 1
    return Key(
        name=base.name,
        char=base.char,
        shift=bool(bits & 1),
        alt=bool(bits & 2),
        ctrl=bool(bits & 4),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def split_sequences(data: bytes) -> list[bytes]:
    """
    Split a raw input chunk into one byte string per key or report.

    Escape sequences are kept whole; UTF-8 characters are kept whole; every
    other byte stands alone.
    """
    out: list[bytes] = []
    i = 0
    while i < len(data):
        if data[i] == 0x1B:
            match = _SEQUENCE_RE.match(data, i)
            end = match.end() if match else i + 1
            out.append(data[i:end])
            i = end
            continue
        lead = data[i]
        if lead >= 0xF0:
            size = 4
        elif lead >= 0xE0:
            size = 3
        elif lead >= 0xC0:
            size = 2
        else:
            size = 1
        out.append(data[i:i + size])
        i += size
    return out


def parse_key(data: bytes) -> Key:
    """
    Decode one key sequence into a :class:`Key`.

    Handles printable ASCII and UTF-8, Ctrl+letter (0x01-0x1a), Alt+key
    (ESC prefix), CSI and SS3 sequences, and xterm modifier suffixes such as
    ``CSI 1;5C`` (Ctrl+Right).  Anything else decodes to ``KEY_UNKNOWN``.
    """
    if not data:
        return KEY_UNKNOWN

    if data[0] == 0x1B:
        return _parse_escape(data)

    byte = data[0]
    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="ctrl+space", char=" ", ctrl=True)
    if 1 <= byte <= 26:
        letter = chr(byte + 96)
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)
    if byte in _CTRL_PUNCTUATION:
        ch = _CTRL_PUNCTUATION[byte]
        return Key(name=f"ctrl+{ch}", char=ch, ctrl=True)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if len(text) == 1 and text.isprintable():
        return rune_key(text)
    return KEY_UNKNOWN


def parse_mouse(data: bytes) -> tuple[int, int, int, bool] | None:
    """
    Decode an SGR mouse report ``ESC [ < b ; x ; y M|m``.

    Returns ``(button_code, x, y, released)`` with 0-based cell
    coordinates, or ``None`` if *data* is not a mouse report.
    """
    match = _SGR_MOUSE_RE.fullmatch(data)
    if match is None:
        return None
    code, x, y, final = match.groups()
    return int(code), int(x) - 1, int(y) - 1, final == b"m"


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------


def _parse_escape(data: bytes) -> Key:
    if len(data) == 1:
        return KEY_ESCAPE

    second = data[1:2]
    if second == b"[":
        return _parse_csi(data[2:])
    if second == b"O" and len(data) == 3:
        return _SS3.get(chr(data[2]), KEY_UNKNOWN)

    if len(data) == 2:
        ch = chr(data[1])
        if ch.isprintable():
            return Key(name=f"alt+{ch}", char=ch, alt=True)
        if 1 <= data[1] <= 26:
            letter = chr(data[1] + 96)
            return Key(name=f"ctrl+{letter}", char=letter, ctrl=True, alt=True)
    return KEY_UNKNOWN


def _parse_csi(payload: bytes) -> Key:
    """Decode the part of a CSI sequence after ``ESC [``."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if not text:
        return KEY_UNKNOWN

    final, params = text[-1], text[:-1]
    parts = params.split(";") if params else []

    if final == "~":
        base = _CSI_TILDE.get(_safe_int(parts[0]) if parts else -1)
        if base is None:
            return KEY_UNKNOWN
        if len(parts) == 2 and _safe_int(parts[1]) is not None:
            return _with_modifiers(base, _safe_int(parts[1]))
        return base

    base = _CSI_FINAL.get(final)
    if base is None:
        return KEY_UNKNOWN
    if not parts:
        return base
    if len(parts) == 2 and _safe_int(parts[1]) is not None:
        return _with_modifiers(base, _safe_int(parts[1]))
    return KEY_UNKNOWN


def _safe_int(s: str) -> int | None:
    try:
        return int(s)
    except (ValueError, TypeError):
        return None
