"""
Input events delivered by a screen to the application loop.

Example:
    from celltui.events import KeyAction, KeyEvent
    from celltui.keys import rune_key

    press = KeyEvent(rune_key("a"))
    release = KeyEvent(rune_key("a"), KeyAction.RELEASE)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from celltui.keys import Key

# ---------------------------------------------------------------------------
# Keys and characters
# ---------------------------------------------------------------------------


class KeyAction(Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A key went down or up."""

    key: Key
    action: KeyAction = KeyAction.PRESS

    @property
    def code(self) -> str:
        """Symbolic key name, e.g. ``"enter"`` or ``"a"``."""
        return self.key.name

    @property
    def rune(self) -> str:
        """The character for printable keys, otherwise ``""``."""
        return self.key.char if self.key.printable else ""

    @property
    def is_release(self) -> bool:
        return self.action is KeyAction.RELEASE


@dataclass(frozen=True)
class CharacterEvent:
    """Text input: one character, after keyboard layout and modifiers."""

    rune: str


# ---------------------------------------------------------------------------
# Pointer
# ---------------------------------------------------------------------------


class PointerKind(Enum):
    CURSOR = "cursor"
    SCROLL = "scroll"


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer movement/click (``CURSOR``) or wheel (``SCROLL``).

    ``x``/``y`` are cell coordinates.  ``button`` is 0 for none, 1-3 for
    left/middle/right.  ``dx``/``dy`` carry scroll deltas.
    """

    kind: PointerKind
    x: int
    y: int
    button: int = 0
    pressed: bool = False
    dx: int = 0
    dy: int = 0


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, CharacterEvent, PointerEvent, ResizeEvent]
