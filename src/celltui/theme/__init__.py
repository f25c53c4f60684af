"""Theme system: explicit colour tables passed to widgets."""
from __future__ import annotations

from celltui.theme.defaults import DEFAULT_THEME, get_default_theme
from celltui.theme.loader import ThemeError, discover_themes, load_theme, resolve_theme
from celltui.theme.models import ALL_COLOR_KEYS, Theme, ThemeColor
from celltui.theme.schema import validate_theme

__all__ = [
    "ALL_COLOR_KEYS",
    "DEFAULT_THEME",
    "Theme",
    "ThemeColor",
    "ThemeError",
    "discover_themes",
    "get_default_theme",
    "load_theme",
    "resolve_theme",
    "validate_theme",
]
