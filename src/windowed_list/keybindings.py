"""Keyboard input handling for windowed lists.

This module maps key presses to command identifiers and forwards them to a
WindowedList. Navigation aliases (top, bottom, grow, shrink) are resolved
against the current viewport state; every other command goes to the
focused item.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import NavigationCommand

if TYPE_CHECKING:
    from .config import ListConfig
    from .controller import WindowedList

logger = logging.getLogger(__name__)

TOP = "top"
BOTTOM = "bottom"
GROW = "grow"
SHRINK = "shrink"
QUIT = "quit"

VI_KEYS = {
    "j": NavigationCommand.INCREMENT.value,
    "k": NavigationCommand.DECREMENT.value,
    "g": TOP,
    "G": BOTTOM,
}

ARROW_KEYS = {
    "down": NavigationCommand.INCREMENT.value,
    "up": NavigationCommand.DECREMENT.value,
    "home": TOP,
    "end": BOTTOM,
}

COMMON_KEYS = {
    "enter": "enter",
    "\r": "enter",
    "\n": "enter",
    "+": GROW,
    "-": SHRINK,
    "q": QUIT,
}


class KeyMap:
    """Lookup table from key identifiers to command names."""

    def __init__(self, bindings: dict[str, str] | None = None) -> None:
        self._bindings: dict[str, str] = dict(bindings or {})

    @classmethod
    def from_config(cls, config: ListConfig) -> KeyMap:
        """Build the key map for a config.

        Explicit ``keybindings`` entries override the built-in sets.
        """
        bindings: dict[str, str] = dict(COMMON_KEYS)
        if config.arrow_keys:
            bindings.update(ARROW_KEYS)
        if config.vi_keys:
            bindings.update(VI_KEYS)
        bindings.update(config.keybindings)
        return cls(bindings)

    def command_for(self, key: str) -> str | None:
        return self._bindings.get(key)

    def keys_for(self, command: str) -> list[str]:
        """All keys bound to ``command``, in binding order."""
        return [key for key, bound in self._bindings.items() if bound == command]

    def __contains__(self, key: str) -> bool:
        return key in self._bindings


class KeybindingHandler:
    """Translates key presses into list commands."""

    def __init__(self, windowed_list: WindowedList, keymap: KeyMap | None = None) -> None:
        """Initialize keybinding handler.

        Args:
            windowed_list: List receiving the translated commands
            keymap: Key map to use, built from the list config when omitted
        """
        self.windowed_list = windowed_list
        self.keymap = keymap or KeyMap.from_config(windowed_list.config)

    def handle_key(self, key: str) -> tuple[bool, str | None]:
        """Process a key press and run the command bound to it.

        Args:
            key: Key identifier (e.g. "j", "down", "enter")

        Returns:
            Tuple of (handled, message):
                - handled: True if the key is bound
                - message: Optional feedback for the user, "quit" to exit
        """
        command = self.keymap.command_for(key)
        if command is None:
            if len(key) == 1 and key.isprintable():
                return False, f"Key '{key}' not assigned"
            return False, f"Key {key!r} not assigned"

        if command == QUIT:
            return True, "quit"

        command, argument = self._resolve(command)
        logger.debug(f"Key {key!r} -> {command} ({argument})")
        if command is None:
            return True, None

        ran = self.windowed_list.handle_command(command, argument)
        self.windowed_list.refresh()

        if not ran and NavigationCommand.parse(command) is None:
            return True, f"No handler for '{command}'"
        return True, None

    def _resolve(self, command: str) -> tuple[str | None, int | None]:
        """Turn navigation aliases into engine commands with arguments."""
        state = self.windowed_list.state

        if command == TOP:
            return NavigationCommand.GO_TO_INDEX.value, 0
        if command == BOTTOM:
            if state.is_empty:
                return None, None
            return NavigationCommand.GO_TO_INDEX.value, state.item_count - 1
        if command in (GROW, SHRINK):
            if state.is_empty:
                return None, None
            if command == GROW:
                # A window already covering the list keeps its configured size.
                if state.window_size >= state.item_count:
                    return None, None
                return NavigationCommand.RESIZE_WINDOW.value, state.window_size + 1
            return NavigationCommand.RESIZE_WINDOW.value, state.target_width - 1
        return command, None
