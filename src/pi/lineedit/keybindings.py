"""Line editor keybindings manager."""

from __future__ import annotations

from typing import Literal

from pi.lineedit.input import KeyEvent
from pi.lineedit.keys import KeyId, key_id, normalize_key_id

Binding = Literal[
    # Session
    "cancel",
    "endOfFile",
    "acceptLine",
    "repaint",
    # Completion
    "complete",
    # History
    "historyPrevious",
    "historyNext",
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteWordBackward",
    "deleteToLineEnd",
]

KeybindingsConfig = dict[Binding, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[Binding, KeyId | list[KeyId]] = {
    # Session
    "cancel": "ctrl+c",
    "endOfFile": "ctrl+d",
    "acceptLine": ["enter", "ctrl+j", "ctrl+m"],
    "repaint": "ctrl+l",
    # Completion
    "complete": "tab",
    # History
    "historyPrevious": ["up", "ctrl+p"],
    "historyNext": ["down", "ctrl+n"],
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorWordLeft": ["alt+left", "alt+b"],
    "cursorWordRight": ["alt+right", "alt+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": ["backspace", "ctrl+h"],
    "deleteWordBackward": "ctrl+w",
    "deleteToLineEnd": "ctrl+k",
}


class KeybindingsManager:
    """Maps key events to binding names.

    A key bound to several bindings resolves to the first one in
    :data:`DEFAULT_KEYBINDINGS` order.
    """

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._binding_to_keys: dict[Binding, list[KeyId]] = {}
        self._key_to_binding: dict[KeyId, Binding] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        # Start with defaults
        for binding, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._binding_to_keys[binding] = [normalize_key_id(k) for k in key_array]

        # Override with user config
        for binding, keys in config.items():
            if binding not in DEFAULT_KEYBINDINGS:
                raise ValueError(f"Unknown keybinding: {binding!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._binding_to_keys[binding] = [normalize_key_id(k) for k in key_array]

        for binding, key_ids in self._binding_to_keys.items():
            for kid in key_ids:
                self._key_to_binding.setdefault(kid, binding)

    def lookup(self, event: KeyEvent) -> Binding | None:
        """Return the binding *event* triggers, if any."""
        return self._key_to_binding.get(key_id(event))

    def get_keys(self, binding: Binding) -> list[KeyId]:
        """Get keys bound to a binding."""
        return self._binding_to_keys.get(binding, [])


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
