"""Theme loading and discovery."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from celltui.theme.defaults import DEFAULT_COLORS, get_default_theme
from celltui.theme.models import Theme
from celltui.theme.schema import validate_theme


class ThemeError(ValueError):
    """Raised when a theme file cannot be parsed or fails validation."""


def load_theme(path: Path) -> Theme:
    """Load a theme from a JSON file.

    A colour value that is not a hex string is resolved against the
    ``variables`` dict first, then against another key of ``colors``.
    Keys the file leaves out are filled from the default theme.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data: dict[str, Any] = json.load(f)
    except json.JSONDecodeError as exc:
        raise ThemeError(f"{path}: invalid JSON: {exc}") from exc

    errors = validate_theme(data)
    if errors:
        raise ThemeError(f"{path}: " + "; ".join(errors))

    variables: dict[str, str] = data.get("variables", {})
    raw_colors: dict[str, Any] = data.get("colors", {})

    colors = dict(DEFAULT_COLORS)
    for key, value in raw_colors.items():
        colors[key] = _resolve(value, variables, raw_colors)

    return Theme(
        name=data.get("name", path.stem),
        description=data.get("description", ""),
        author=data.get("author", ""),
        colors=colors,
    )


def _resolve(value: Any, variables: dict[str, str], colors: dict[str, Any]) -> str:
    if not isinstance(value, str) or value.startswith("#"):
        return str(value)
    if value in variables:
        return variables[value]
    if value in colors:
        ref = colors[value]
        return variables.get(ref, str(ref)) if isinstance(ref, str) else str(ref)
    return value


def discover_themes(
    user_dir: Path | None = None,
    project_dir: Path | None = None,
) -> list[Path]:
    """Find theme files in ``~/.celltui/themes/`` and ``./.celltui/themes/``."""
    found: list[Path] = []
    dirs = [
        user_dir or (Path.home() / ".celltui" / "themes"),
        project_dir or (Path.cwd() / ".celltui" / "themes"),
    ]
    for d in dirs:
        if d.is_dir():
            found.extend(f for f in sorted(d.glob("*.json")) if f.is_file())
    return found


def resolve_theme(name_or_path: str | None, search: list[Path] | None = None) -> Theme:
    """
    Pick a theme by file path or by name among discovered theme files.

    ``None`` or ``"default"`` gives the built-in theme.
    """
    if not name_or_path or name_or_path == "default":
        return get_default_theme()
    candidate = Path(name_or_path).expanduser()
    if candidate.is_file():
        return load_theme(candidate)
    for path in search if search is not None else discover_themes():
        if path.stem == name_or_path:
            return load_theme(path)
    raise ThemeError(f"Unknown theme: {name_or_path!r}")
