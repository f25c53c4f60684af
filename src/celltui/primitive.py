"""
The capability contract every node of the UI tree implements.

A primitive draws itself onto a screen, knows its rectangle, takes part in
the focus lifecycle and may expose one handler per input category.
Handlers receive the event and a ``request_focus`` callback; calling it is
the only way for a handler to move focus.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from celltui.screen.base import Screen

RequestFocus = Callable[["Primitive"], Any]
"""Callback that moves focus to the given primitive."""

E = TypeVar("E")

Handler = Callable[[E, RequestFocus], None]
"""An input handler: ``handler(event, request_focus)``."""


class Primitive(ABC):
    """
    Base class for everything that can be drawn and focused.

    Subclasses must implement drawing, geometry and the focus lifecycle.
    The handler getters return ``None`` unless overridden.
    """

    @abstractmethod
    def draw(self, screen: Screen) -> None:
        """Paint this primitive (and its children) onto *screen*."""

    @abstractmethod
    def get_rect(self) -> tuple[int, int, int, int]:
        """``(x, y, width, height)``."""

    @abstractmethod
    def set_rect(self, x: int, y: int, width: int, height: int) -> None: ...

    @abstractmethod
    def get_inner_rect(self) -> tuple[int, int, int, int]:
        """The drawable interior after borders and title are reserved."""

    @abstractmethod
    def focus(self, request_focus: RequestFocus) -> None:
        """
        Called when this primitive receives focus.

        Containers may pass focus on by calling *request_focus* with a
        child; the call is made outside the application lock.
        """

    @abstractmethod
    def blur(self) -> None:
        """Called when this primitive loses focus."""

    @abstractmethod
    def has_focus(self) -> bool: ...

    def key_handler(self) -> Handler | None:
        return None

    def mouse_handler(self) -> Handler | None:
        return None

    def character_handler(self) -> Handler | None:
        return None


def wrap_handler(owner: Primitive, handler: Handler) -> Handler:
    """
    Make *handler* a no-op while *owner* does not hold focus.

    An event can be routed to a primitive that loses focus before its
    handler runs; the guard keeps such a stale primitive from touching its
    state or firing callbacks.
    """

    @functools.wraps(handler)
    def guarded(event: Any, request_focus: RequestFocus) -> None:
        if not owner.has_focus():
            return
        handler(event, request_focus)

    return guarded
