"""Tests for keybinding management."""

import json

import pytest

from celltui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager, normalise_descriptor
from celltui.keys import KEY_CTRL_C, Key


class TestNormaliseDescriptor:
    def test_sorts_modifiers_and_lowercases(self) -> None:
        assert normalise_descriptor("Shift+Ctrl+M") == "ctrl+shift+m"

    def test_strips_whitespace(self) -> None:
        assert normalise_descriptor(" ctrl + c ") == "ctrl+c"


class TestKeybindingsManager:
    """Tests for KeybindingsManager."""

    def test_defaults_loaded(self) -> None:
        """All default actions should be present in a fresh manager."""
        manager = KeybindingsManager()

        assert set(manager.actions()) == set(DEFAULT_KEYBINDINGS)

    def test_quit_defaults_to_ctrl_c(self) -> None:
        manager = KeybindingsManager()

        assert manager.matches("ctrl+c", "quit") is True
        assert manager.matches(KEY_CTRL_C, "quit") is True
        assert manager.matches("ctrl+d", "quit") is False

    def test_shift_modifier_is_significant(self) -> None:
        manager = KeybindingsManager(user_overrides={"redraw": ["shift+tab"]})

        assert manager.matches(Key(name="tab", char="\t", shift=True), "redraw") is True
        assert manager.matches(Key(name="tab", char="\t"), "redraw") is False

    def test_unknown_action_never_matches(self) -> None:
        assert KeybindingsManager().matches("ctrl+c", "nonexistent") is False

    def test_user_overrides_replace_defaults(self) -> None:
        """User overrides should replace the default bindings for that action."""
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+q"]})

        assert manager.matches(Key(name="ctrl+q", char="q", ctrl=True), "quit") is True
        assert manager.matches("ctrl+c", "quit") is False
        assert manager.matches("ctrl+l", "redraw") is True

    def test_get_keys_returns_descriptors(self) -> None:
        manager = KeybindingsManager(user_overrides={"quit": ["Ctrl+Q"]})

        assert manager.get_keys("quit") == ["Ctrl+Q"]
        assert manager.get_keys("nonexistent") == []

    def test_find_action(self) -> None:
        manager = KeybindingsManager()

        assert manager.find_action("ctrl+c") == "quit"
        assert manager.find_action("ctrl+l") == "redraw"
        assert manager.find_action("ctrl+z") is None

    def test_to_dict_is_a_copy(self) -> None:
        manager = KeybindingsManager()
        data = manager.to_dict()
        data["quit"].append("ctrl+x")

        assert manager.get_keys("quit") == ["ctrl+c"]

    def test_load_from_json_file(self, tmp_path) -> None:
        """load() should read overrides from a JSON config file."""
        config_file = tmp_path / "keybindings.json"
        config_file.write_text(json.dumps({"quit": ["ctrl+q", "ctrl+c"], "redraw": "ctrl+r"}), encoding="utf-8")

        manager = KeybindingsManager.load(config_path=config_file)

        assert manager.matches("ctrl+q", "quit") is True
        assert manager.matches("ctrl+c", "quit") is True
        # Malformed entries are skipped, keeping the default
        assert manager.get_keys("redraw") == ["ctrl+l"]

    def test_load_with_missing_file_uses_defaults(self, tmp_path) -> None:
        manager = KeybindingsManager.load(config_path=tmp_path / "does_not_exist.json")

        assert manager.to_dict() == DEFAULT_KEYBINDINGS

    def test_load_with_invalid_json_uses_defaults(self, tmp_path) -> None:
        config_file = tmp_path / "keybindings.json"
        config_file.write_text("{oops", encoding="utf-8")

        manager = KeybindingsManager.load(config_path=config_file)

        assert manager.to_dict() == DEFAULT_KEYBINDINGS

    def test_load_overrides_win_over_file(self, tmp_path) -> None:
        config_file = tmp_path / "keybindings.json"
        config_file.write_text(json.dumps({"quit": ["ctrl+q"], "redraw": ["ctrl+r"]}), encoding="utf-8")

        manager = KeybindingsManager.load(config_path=config_file, overrides={"quit": ["ctrl+x"]})

        assert manager.get_keys("quit") == ["ctrl+x"]
        assert manager.get_keys("redraw") == ["ctrl+r"]

    def test_load_reads_home_directory(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / ".celltui" / "keybindings.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"quit": ["ctrl+q"]}), encoding="utf-8")

        manager = KeybindingsManager.load()

        assert manager.matches("ctrl+q", "quit") is True
