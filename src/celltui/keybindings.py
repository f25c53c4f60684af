"""
Keybinding management.

Maps logical actions to key descriptors and supports user overrides loaded
from a JSON file.  The application acts on two of them: ``quit`` stops the
event loop and ``redraw`` clears the screen and draws it again.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from celltui.keys import Key
from celltui.logging import get_logger

logger = get_logger("keybindings")

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "quit": ["ctrl+c"],
    "redraw": ["ctrl+l"],
}

def default_keybindings_path() -> Path:
    return Path.home() / ".celltui" / "keybindings.json"


def normalise_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor.

    ``"Shift+Ctrl+M"`` -> ``"ctrl+shift+m"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(parts[:-1])
    return "+".join(modifiers + [parts[-1]])


class KeybindingsManager:
    """
    Maps logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to descriptor lists that replace
        the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [normalise_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        overrides: dict[str, list[str]] | None = None,
    ) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        Falls back to ``~/.celltui/keybindings.json`` and then to the
        defaults.  The file maps action names to descriptor lists::

            {"quit": ["ctrl+q", "ctrl+c"]}

        Entries that are not lists of strings are ignored.  *overrides*
        (usually ``AppConfig.keybindings``) win over the file.
        """
        path = Path(config_path) if config_path is not None else default_keybindings_path()
        if not path.is_file():
            return cls(user_overrides=overrides)

        try:
            raw: Any = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable keybindings file %s: %s", path, exc)
            return cls(user_overrides=overrides)

        from_file: dict[str, list[str]] = {}
        if isinstance(raw, dict):
            for action, value in raw.items():
                if isinstance(value, list) and all(isinstance(v, str) for v in value):
                    from_file[action] = value
                else:
                    logger.debug("Skipping malformed binding for %r", action)
        return cls(user_overrides={**from_file, **(overrides or {})})

    def matches(self, key: Key | str, action: str) -> bool:
        """Whether *key* (a :class:`Key` or descriptor string) is bound to *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False
        if isinstance(key, str):
            return normalise_descriptor(key) in descriptors
        return key.descriptor() in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the descriptors bound to *action*, as originally written."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """First action (in insertion order) bound to *key*, or ``None``."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None

    def to_dict(self) -> dict[str, list[str]]:
        return {action: list(keys) for action, keys in self._bindings.items()}
