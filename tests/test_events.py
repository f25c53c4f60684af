"""Tests for input event types."""

from __future__ import annotations

import dataclasses

import pytest

from celltui.events import CharacterEvent, KeyAction, KeyEvent, PointerEvent, PointerKind
from celltui.keys import KEY_ENTER, KEY_UP, rune_key


class TestKeyEvent:
    def test_defaults_to_press(self) -> None:
        event = KeyEvent(rune_key("a"))
        assert event.action is KeyAction.PRESS
        assert event.is_release is False

    def test_code_and_rune(self) -> None:
        assert KeyEvent(rune_key("a")).code == "a"
        assert KeyEvent(rune_key("a")).rune == "a"
        assert KeyEvent(KEY_UP).code == "up"
        assert KeyEvent(KEY_UP).rune == ""

    def test_enter_has_no_rune(self) -> None:
        assert KeyEvent(KEY_ENTER).rune == ""

    def test_release(self) -> None:
        assert KeyEvent(KEY_UP, KeyAction.RELEASE).is_release is True

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            KeyEvent(KEY_UP).key = KEY_ENTER  # type: ignore[misc]

    def test_equality(self) -> None:
        assert KeyEvent(rune_key("a")) == KeyEvent(rune_key("a"))
        assert KeyEvent(rune_key("a")) != KeyEvent(rune_key("a"), KeyAction.RELEASE)


class TestOtherEvents:
    def test_character(self) -> None:
        assert CharacterEvent("é").rune == "é"

    def test_pointer_defaults(self) -> None:
        event = PointerEvent(PointerKind.CURSOR, 3, 4)
        assert (event.button, event.pressed, event.dx, event.dy) == (0, False, 0, 0)
