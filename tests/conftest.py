"""Shared pytest fixtures for celltui tests."""

from __future__ import annotations

from typing import Any

import pytest

from celltui.application import Application
from celltui.config import ScreenConfig
from celltui.events import CharacterEvent, KeyEvent, PointerEvent
from celltui.primitive import Handler, Primitive, RequestFocus
from celltui.screen import Screen, SimulationScreen, Style


class RecordingPrimitive(Primitive):
    """
    Primitive that records every lifecycle call into a shared log.

    Key, character and pointer events are appended to ``events``; typed
    runes accumulate in ``text`` and are painted at the top-left corner.
    """

    def __init__(self, name: str, log: list[tuple[str, str]] | None = None) -> None:
        self.name = name
        self.log = log if log is not None else []
        self.events: list[Any] = []
        self.text = ""
        self.rect = (0, 0, 15, 10)
        self.focused = False
        self.draw_count = 0
        self.on_focus: Any = None
        self.on_blur: Any = None

    def draw(self, screen: Screen) -> None:
        self.draw_count += 1
        self.log.append(("draw", self.name))
        x, y, _, _ = self.rect
        for offset, ch in enumerate(self.text):
            screen.set_content(x + offset, y, ch, Style())

    def get_rect(self) -> tuple[int, int, int, int]:
        return self.rect

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        self.rect = (x, y, width, height)

    def get_inner_rect(self) -> tuple[int, int, int, int]:
        return self.rect

    def focus(self, request_focus: RequestFocus) -> None:
        self.log.append(("focus", self.name))
        self.focused = True
        if self.on_focus is not None:
            self.on_focus(request_focus)

    def blur(self) -> None:
        self.log.append(("blur", self.name))
        self.focused = False
        if self.on_blur is not None:
            self.on_blur()

    def has_focus(self) -> bool:
        return self.focused

    def key_handler(self) -> Handler | None:
        def handle(event: KeyEvent, request_focus: RequestFocus) -> None:
            self.events.append(event)
            if event.rune:
                self.text += event.rune

        return handle

    def character_handler(self) -> Handler | None:
        def handle(event: CharacterEvent, request_focus: RequestFocus) -> None:
            self.events.append(event)

        return handle

    def mouse_handler(self) -> Handler | None:
        def handle(event: PointerEvent, request_focus: RequestFocus) -> None:
            self.events.append(event)

        return handle


@pytest.fixture
def call_log() -> list[tuple[str, str]]:
    """Ordered record of focus/blur/draw calls across primitives."""
    return []


@pytest.fixture
def make_primitive(call_log: list[tuple[str, str]]):
    """Factory for recording primitives sharing ``call_log``."""

    def make(name: str) -> RecordingPrimitive:
        return RecordingPrimitive(name, call_log)

    return make


@pytest.fixture
def screen() -> SimulationScreen:
    """An 80x24 in-memory screen."""
    return SimulationScreen(width=80, height=24)


@pytest.fixture
def app(screen: SimulationScreen) -> Application:
    """An application whose screen factory returns the ``screen`` fixture."""
    return Application(
        ScreenConfig(backend="simulation"),
        screen_factory=lambda config: screen,
    )
