"""
celltui - a cell-based terminal UI toolkit.

An :class:`Application` owns a screen, a root primitive and the keyboard
focus.  It runs a blocking event loop that routes key, character, pointer
and resize events to primitives and redraws the tree after each handled
event.

Example:
    from celltui import Application, ScreenConfig
    from celltui.widgets import List

    app = Application(ScreenConfig())
    menu = List()
    menu.add_item("Quit", "Leave the program", "q", app.stop)
    app.set_root(menu, fullscreen=True)
    app.run()
"""

from celltui.application import Application, BackendInitError
from celltui.box import Box, Widget
from celltui.config import AppConfig, ConfigError, ScreenConfig, WindowConfig
from celltui.events import (
    CharacterEvent,
    Event,
    KeyAction,
    KeyEvent,
    PointerEvent,
    PointerKind,
    ResizeEvent,
)
from celltui.keybindings import KeybindingsManager
from celltui.keys import Key
from celltui.primitive import Primitive, wrap_handler
from celltui.screen import Screen, SimulationScreen, Style, new_screen
from celltui.theme import Theme, get_default_theme

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "Application",
    "BackendInitError",
    "Box",
    "CharacterEvent",
    "ConfigError",
    "Event",
    "Key",
    "KeyAction",
    "KeyEvent",
    "KeybindingsManager",
    "PointerEvent",
    "PointerKind",
    "Primitive",
    "ResizeEvent",
    "Screen",
    "ScreenConfig",
    "SimulationScreen",
    "Style",
    "Theme",
    "Widget",
    "WindowConfig",
    "get_default_theme",
    "new_screen",
    "wrap_handler",
]
