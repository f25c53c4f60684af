"""Rendering and input surfaces."""
from __future__ import annotations

from celltui.config import ScreenConfig
from celltui.screen.base import EMPTY_CELL, STYLE_DEFAULT, Cell, CellBuffer, Screen, Style
from celltui.screen.simulation import SimulationScreen


def new_screen(config: ScreenConfig | None = None) -> Screen:
    """
    Build the screen selected by ``config.backend``.

    The terminal back-end is imported lazily because it needs the Unix-only
    ``termios`` module.
    """
    config = config or ScreenConfig()
    if config.backend == "simulation":
        return SimulationScreen(width=80, height=25)
    from celltui.screen.terminal import TerminalScreen

    return TerminalScreen(config)


__all__ = [
    "EMPTY_CELL",
    "STYLE_DEFAULT",
    "Cell",
    "CellBuffer",
    "Screen",
    "ScreenConfig",
    "SimulationScreen",
    "Style",
    "new_screen",
]
