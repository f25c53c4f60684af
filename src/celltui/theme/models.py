"""
Theme data model.

A theme is an explicit value handed to widget constructors; there is no
process-wide style table.  Colours are hex strings (``"#rrggbb"``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Colour keys
# ---------------------------------------------------------------------------

BACKGROUND_KEYS: list[str] = [
    "primitive_background",  # main background of every primitive
    "contrast_background",  # contrasting elements, e.g. input fields
    "more_contrast_background",
]

CHROME_KEYS: list[str] = [
    "border",
    "title",
    "graphics",
]

TEXT_KEYS: list[str] = [
    "primary_text",
    "secondary_text",  # labels
    "tertiary_text",  # subtitles, secondary list text
    "inverse_text",  # text on primary-coloured backgrounds
    "contrast_secondary_text",  # secondary text on contrast_background
]

ALL_COLOR_KEYS: list[str] = BACKGROUND_KEYS + CHROME_KEYS + TEXT_KEYS
"""Every colour key a complete theme provides."""

ThemeColor = dict[str, str]


@dataclass
class Theme:
    """
    A named colour table.

    Attributes
    ----------
    name:
        Short identifier (e.g. ``"default"``).
    description:
        One-line description.
    author:
        Theme author name or handle.
    colors:
        Mapping from colour key to hex string.  Themes produced by the
        loader always contain every key in :data:`ALL_COLOR_KEYS`.
    """

    name: str = "untitled"
    description: str = ""
    author: str = ""
    colors: ThemeColor = field(default_factory=dict)

    def get(self, key: str, fallback: str = "#ffffff") -> str:
        """Return the colour for *key*, or *fallback* if absent."""
        return self.colors.get(key, fallback)

    def __getitem__(self, key: str) -> str:
        return self.colors[key]

    def __contains__(self, key: str) -> bool:
        return key in self.colors

    def copy(self) -> Theme:
        return Theme(
            name=self.name,
            description=self.description,
            author=self.author,
            colors=dict(self.colors),
        )
