"""Ready-made widgets built on :class:`celltui.box.Widget`."""
from __future__ import annotations

from celltui.widgets.checkbox import Checkbox
from celltui.widgets.input_field import (
    InputField,
    accept_float,
    accept_integer,
    accept_max_length,
)
from celltui.widgets.list import List, ListItem
from celltui.widgets.video import VideoLoadError, VideoPlayer

__all__ = [
    "Checkbox",
    "InputField",
    "List",
    "ListItem",
    "VideoLoadError",
    "VideoPlayer",
    "accept_float",
    "accept_integer",
    "accept_max_length",
]
