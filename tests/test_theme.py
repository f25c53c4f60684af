"""Tests for the theme system: models, defaults, loader, schema."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from celltui.theme import (
    ALL_COLOR_KEYS,
    DEFAULT_THEME,
    Theme,
    ThemeError,
    discover_themes,
    get_default_theme,
    load_theme,
    resolve_theme,
    validate_theme,
)


def write_theme(directory: Path, name: str, data: dict) -> Path:
    path = directory / f"{name}.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# TestTheme
# ---------------------------------------------------------------------------


class TestTheme:
    """Tests for the Theme dataclass."""

    def test_creation_with_defaults(self) -> None:
        theme = Theme()
        assert theme.name == "untitled"
        assert theme.description == ""
        assert theme.author == ""
        assert theme.colors == {}

    def test_get_existing_key(self) -> None:
        theme = Theme(colors={"border": "#abcdef"})
        assert theme.get("border") == "#abcdef"

    def test_get_missing_key_returns_fallback(self) -> None:
        assert Theme().get("border") == "#ffffff"
        assert Theme().get("border", fallback="#000000") == "#000000"

    def test_getitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            Theme()["border"]

    def test_contains(self) -> None:
        theme = Theme(colors={"title": "#fff"})
        assert "title" in theme
        assert "border" not in theme

    def test_copy_is_independent(self) -> None:
        theme = Theme(name="x", colors={"title": "#fff"})
        clone = theme.copy()
        clone.colors["title"] = "#000"

        assert theme.colors["title"] == "#fff"
        assert clone.name == "x"


# ---------------------------------------------------------------------------
# TestDefaultTheme
# ---------------------------------------------------------------------------


class TestDefaultTheme:
    """Tests for the built-in default theme."""

    def test_color_key_count(self) -> None:
        assert len(ALL_COLOR_KEYS) == 11
        assert len(set(ALL_COLOR_KEYS)) == len(ALL_COLOR_KEYS)

    def test_default_theme_has_all_color_keys(self) -> None:
        for key in ALL_COLOR_KEYS:
            assert key in DEFAULT_THEME, f"Missing key: {key}"

    def test_default_theme_colors_are_hex(self) -> None:
        for key, value in DEFAULT_THEME.colors.items():
            assert value.startswith("#") and len(value) == 7, f"{key}: {value}"

    def test_default_palette(self) -> None:
        assert DEFAULT_THEME["primitive_background"] == "#000000"
        assert DEFAULT_THEME["contrast_background"] == "#0000ff"
        assert DEFAULT_THEME["secondary_text"] == "#ffff00"
        assert DEFAULT_THEME["contrast_secondary_text"] == "#008b8b"

    def test_get_default_theme_returns_copy(self) -> None:
        theme = get_default_theme()
        theme.colors["border"] = "#123456"

        assert DEFAULT_THEME["border"] == "#ffffff"
        assert get_default_theme() is not get_default_theme()


# ---------------------------------------------------------------------------
# TestLoadTheme
# ---------------------------------------------------------------------------


class TestLoadTheme:
    """Tests for load_theme()."""

    def test_load_basic_theme(self, tmp_path: Path) -> None:
        path = write_theme(
            tmp_path,
            "ocean",
            {"name": "ocean", "description": "Blue", "author": "me", "colors": {"border": "#00ffff"}},
        )

        theme = load_theme(path)

        assert theme.name == "ocean"
        assert theme.description == "Blue"
        assert theme.author == "me"
        assert theme["border"] == "#00ffff"

    def test_missing_keys_filled_from_defaults(self, tmp_path: Path) -> None:
        path = write_theme(tmp_path, "partial", {"name": "partial", "colors": {"title": "#ff0000"}})

        theme = load_theme(path)

        for key in ALL_COLOR_KEYS:
            assert key in theme
        assert theme["primary_text"] == DEFAULT_THEME["primary_text"]

    def test_variables_and_color_references(self, tmp_path: Path) -> None:
        path = write_theme(
            tmp_path,
            "vars",
            {
                "name": "vars",
                "variables": {"accent": "#ff8800"},
                "colors": {"border": "accent", "title": "border"},
            },
        )

        theme = load_theme(path)

        assert theme["border"] == "#ff8800"
        assert theme["title"] == "#ff8800"

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ThemeError, match="invalid JSON"):
            load_theme(path)

    def test_invalid_theme_raises(self, tmp_path: Path) -> None:
        path = write_theme(tmp_path, "bad", {"colors": {"border": "#12"}})

        with pytest.raises(ThemeError) as excinfo:
            load_theme(path)

        assert "name" in str(excinfo.value)
        assert "border" in str(excinfo.value)


# ---------------------------------------------------------------------------
# TestDiscoverThemes / TestResolveTheme
# ---------------------------------------------------------------------------


class TestDiscoverThemes:
    """Tests for discover_themes()."""

    def test_discover_from_both_dirs(self, tmp_path: Path) -> None:
        user_dir = tmp_path / "user"
        project_dir = tmp_path / "project"
        user_dir.mkdir()
        project_dir.mkdir()
        write_theme(user_dir, "a", {"name": "a", "colors": {}})
        write_theme(project_dir, "b", {"name": "b", "colors": {}})
        (project_dir / "notes.txt").write_text("ignored")

        found = discover_themes(user_dir=user_dir, project_dir=project_dir)

        assert [p.name for p in found] == ["a.json", "b.json"]

    def test_discover_nonexistent_directories(self, tmp_path: Path) -> None:
        found = discover_themes(user_dir=tmp_path / "nope", project_dir=tmp_path / "nada")
        assert found == []


class TestResolveTheme:
    """Tests for resolve_theme()."""

    def test_default_names(self) -> None:
        assert resolve_theme(None).name == "default"
        assert resolve_theme("default").name == "default"

    def test_by_path(self, tmp_path: Path) -> None:
        path = write_theme(tmp_path, "night", {"name": "night", "colors": {}})
        assert resolve_theme(str(path)).name == "night"

    def test_by_name_in_search_list(self, tmp_path: Path) -> None:
        path = write_theme(tmp_path, "night", {"name": "Night Mode", "colors": {}})
        assert resolve_theme("night", search=[path]).name == "Night Mode"

    def test_unknown_raises(self) -> None:
        with pytest.raises(ThemeError, match="Unknown theme"):
            resolve_theme("no-such-theme", search=[])


# ---------------------------------------------------------------------------
# TestValidateTheme
# ---------------------------------------------------------------------------


class TestValidateTheme:
    """Tests for validate_theme()."""

    def test_valid_theme_no_errors(self) -> None:
        assert validate_theme({"name": "t", "colors": {"border": "#fff", "title": "#ffffff"}}) == []

    def test_missing_required_fields(self) -> None:
        errors = validate_theme({})
        assert len(errors) == 2

    def test_not_a_dict_returns_error(self) -> None:
        assert validate_theme([1, 2]) == ["Theme must be a JSON object"]

    def test_invalid_hex_color(self) -> None:
        errors = validate_theme({"name": "t", "colors": {"border": "#xyz123"}})
        assert any("border" in e for e in errors)

    def test_color_value_must_be_string(self) -> None:
        errors = validate_theme({"name": "t", "colors": {"border": 5}})
        assert any("must be a string" in e for e in errors)

    def test_variables_must_be_object(self) -> None:
        errors = validate_theme({"name": "t", "colors": {}, "variables": []})
        assert errors == ["'variables' must be an object"]

    def test_reference_values_are_not_hex_checked(self) -> None:
        assert validate_theme({"name": "t", "colors": {"title": "border"}}) == []
