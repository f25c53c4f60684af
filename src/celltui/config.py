"""
Configuration models for celltui.

Screen and application settings, loaded from YAML files or constructed
programmatically.  The screen configuration is opaque to the application
controller: it is stored at construction and handed to the screen factory
when :meth:`celltui.application.Application.run` starts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

Backend = Literal["terminal", "simulation"]

_BACKENDS = ("terminal", "simulation")


class ConfigError(ValueError):
    """Raised for configuration files that cannot be used."""


def get_default_backend() -> Backend:
    """Back-end from ``CELLTUI_BACKEND``, defaulting to ``'terminal'``."""
    val = os.environ.get("CELLTUI_BACKEND", "terminal").lower()
    if val in _BACKENDS:
        return val  # type: ignore[return-value]
    return "terminal"


@dataclass
class WindowConfig:
    """Window parameters for back-ends that open their own window."""

    title: str = "celltui"
    width: int = 1024
    height: int = 768
    resizable: bool = True
    vsync: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WindowConfig:
        return cls(
            title=data.get("title", "celltui"),
            width=int(data.get("width", 1024)),
            height=int(data.get("height", 768)),
            resizable=data.get("resizable", True),
            vsync=data.get("vsync", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "width": self.width,
            "height": self.height,
            "resizable": self.resizable,
            "vsync": self.vsync,
        }


@dataclass
class ScreenConfig:
    """
    Screen construction parameters.

    Example YAML:
        font_size: 14
        font_path: /usr/share/fonts/TTF/DejaVuSansMono.ttf
        adjust_x: 0.0
        adjust_y: 1.5
        dpi: 96
        backend: terminal
        mouse: true
        window:
          title: My app
          width: 1280
          height: 720
    """

    # Font and cell metrics
    font_size: float = 14.0
    font_path: str = ""
    adjust_x: float = 0.0  # horizontal cell spacing adjustment
    adjust_y: float = 0.0  # vertical cell spacing adjustment
    dpi: float = 96.0

    window: WindowConfig = field(default_factory=WindowConfig)

    backend: Backend = field(default_factory=get_default_backend)
    mouse: bool = False  # report pointer events
    alt_screen: bool = True  # draw on the terminal's alternate screen

    def get_font_size(self) -> float:
        return self.font_size

    def get_font_path(self) -> str:
        return self.font_path

    def get_adjust_xy(self) -> tuple[float, float]:
        return self.adjust_x, self.adjust_y

    def get_dpi(self) -> float:
        return self.dpi

    def get_window_config(self) -> WindowConfig:
        return self.window

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScreenConfig:
        backend = data.get("backend", get_default_backend())
        if backend not in _BACKENDS:
            raise ConfigError(f"Unknown backend {backend!r}; expected one of {_BACKENDS}")
        return cls(
            font_size=float(data.get("font_size", 14.0)),
            font_path=data.get("font_path", ""),
            adjust_x=float(data.get("adjust_x", 0.0)),
            adjust_y=float(data.get("adjust_y", 0.0)),
            dpi=float(data.get("dpi", 96.0)),
            window=WindowConfig.from_dict(data.get("window") or {}),
            backend=backend,
            mouse=data.get("mouse", False),
            alt_screen=data.get("alt_screen", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "font_size": self.font_size,
            "font_path": self.font_path,
            "adjust_x": self.adjust_x,
            "adjust_y": self.adjust_y,
            "dpi": self.dpi,
            "window": self.window.to_dict(),
            "backend": self.backend,
            "mouse": self.mouse,
            "alt_screen": self.alt_screen,
        }


@dataclass
class AppConfig:
    """
    Top-level configuration for applications built on celltui.

    Example YAML:
        theme: default
        log_level: WARNING
        keybindings:
          quit: ["ctrl+q", "ctrl+c"]
        screen:
          mouse: true
    """

    screen: ScreenConfig = field(default_factory=ScreenConfig)
    theme: str = "default"  # theme name or path to a theme JSON file
    keybindings: dict[str, list[str]] = field(default_factory=dict)
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        keybindings = data.get("keybindings") or {}
        if not isinstance(keybindings, dict):
            raise ConfigError("'keybindings' must be a mapping of action to key list")
        return cls(
            screen=ScreenConfig.from_dict(data.get("screen") or {}),
            theme=data.get("theme", "default"),
            keybindings={k: list(v) for k, v in keybindings.items()},
            log_level=data.get("log_level", "WARNING"),
            log_file=data.get("log_file"),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> AppConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            return cls.from_yaml_string(f.read())

    @classmethod
    def from_yaml_string(cls, content: str) -> AppConfig:
        """Load config from a YAML string."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}") from exc
        if data is not None and not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "screen": self.screen.to_dict(),
            "theme": self.theme,
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
            "log_level": self.log_level,
            "log_file": self.log_file,
        }
