"""
Built-in default theme.

Black background with basic colours: black, white, yellow, green and blue.
"""

from __future__ import annotations

from celltui.theme.models import Theme, ThemeColor

DEFAULT_COLORS: ThemeColor = {
    "primitive_background": "#000000",
    "contrast_background": "#0000ff",
    "more_contrast_background": "#008000",
    "border": "#ffffff",
    "title": "#ffffff",
    "graphics": "#ffffff",
    "primary_text": "#ffffff",
    "secondary_text": "#ffff00",
    "tertiary_text": "#008000",
    "inverse_text": "#0000ff",
    "contrast_secondary_text": "#008b8b",
}


DEFAULT_THEME = Theme(
    name="default",
    description="Black background with basic colours",
    author="celltui",
    colors=dict(DEFAULT_COLORS),
)


def get_default_theme() -> Theme:
    """Return a fresh copy of the default theme, safe to mutate."""
    return DEFAULT_THEME.copy()
