"""Unit tests for KeyMap and KeybindingHandler."""

from __future__ import annotations

import pytest

from windowed_list.config import ListConfig
from windowed_list.controller import ItemContext, WindowedList
from windowed_list.keybindings import KeybindingHandler, KeyMap
from windowed_list.models import CommandEvent


@pytest.fixture
def events() -> list[int]:
    return []


@pytest.fixture
def windowed(events: list[int]) -> WindowedList:
    """Create a 21 item list with a window of 5."""

    def bind(ctx: ItemContext) -> None:
        def on_enter(event: CommandEvent) -> None:
            events.append(event.item_index)

        ctx.register("enter", on_enter)

    windowed = WindowedList(
        [f"item-{i}" for i in range(21)],
        config=ListConfig(window_size=5, strict_invariants=True),
        binder=bind,
    )
    windowed.refresh()
    return windowed


class TestKeyMap:
    """Tests for building key maps from config."""

    def test_default_map_has_vi_and_arrows(self) -> None:
        """Both key sets are enabled by default."""
        keymap = KeyMap.from_config(ListConfig())

        assert keymap.command_for("j") == "increment"
        assert keymap.command_for("down") == "increment"
        assert keymap.command_for("k") == "decrement"
        assert keymap.command_for("up") == "decrement"
        assert keymap.command_for("enter") == "enter"

    def test_vi_keys_disabled(self) -> None:
        """vi_keys=False removes j/k/g/G."""
        keymap = KeyMap.from_config(ListConfig(vi_keys=False))

        assert "j" not in keymap
        assert "G" not in keymap
        assert keymap.command_for("down") == "increment"

    def test_arrow_keys_disabled(self) -> None:
        """arrow_keys=False removes up/down."""
        keymap = KeyMap.from_config(ListConfig(arrow_keys=False))

        assert "down" not in keymap
        assert keymap.command_for("j") == "increment"

    def test_custom_bindings_override(self) -> None:
        """Explicit keybindings win over built-in keys."""
        keymap = KeyMap.from_config(ListConfig(keybindings={"j": "decrement", "x": "delete"}))

        assert keymap.command_for("j") == "decrement"
        assert keymap.command_for("x") == "delete"

    def test_keys_for_command(self) -> None:
        """Reverse lookup lists every key bound to a command."""
        keymap = KeyMap.from_config(ListConfig())

        assert set(keymap.keys_for("increment")) == {"j", "down"}


class TestHandleKey:
    """Tests for translating keys into list commands."""

    def test_j_moves_down(self, windowed: WindowedList) -> None:
        """j moves focus to the next item."""
        handler = KeybindingHandler(windowed)

        handled, message = handler.handle_key("j")

        assert handled is True
        assert message is None
        assert windowed.focus_index == 1

    def test_capital_g_jumps_to_bottom(self, windowed: WindowedList) -> None:
        """G jumps to the last item."""
        handler = KeybindingHandler(windowed)

        handler.handle_key("G")

        assert windowed.focus_index == 20
        assert (windowed.state.window_start, windowed.state.window_end) == (16, 21)

    def test_g_jumps_to_top(self, windowed: WindowedList) -> None:
        """g jumps back to the first item."""
        handler = KeybindingHandler(windowed)
        handler.handle_key("G")

        handler.handle_key("g")

        assert windowed.focus_index == 0

    def test_plus_and_minus_resize(self, windowed: WindowedList) -> None:
        """+ grows and - shrinks the window by one."""
        handler = KeybindingHandler(windowed)

        handler.handle_key("+")
        assert windowed.state.width == 6

        handler.handle_key("-")
        handler.handle_key("-")
        assert windowed.state.width == 4

    def test_plus_on_short_list_keeps_window_size(self, windowed: WindowedList) -> None:
        """Growing a window that already shows the whole list keeps its size."""
        handler = KeybindingHandler(windowed)
        items = windowed.items
        windowed.refresh(items[:3])

        handled, message = handler.handle_key("+")

        assert (handled, message) == (True, None)
        assert windowed.state.window_size == 5

        windowed.refresh(items)
        assert windowed.state.width == 5

    def test_minus_on_short_list_shrinks_visible_width(self, windowed: WindowedList) -> None:
        """Shrinking steps down from the visible width, not the configured size."""
        handler = KeybindingHandler(windowed)
        windowed.refresh(windowed.items[:3])

        handler.handle_key("-")

        assert windowed.state.width == 2
        assert windowed.state.window_size == 2

    def test_enter_dispatches_to_focused_item(
        self, windowed: WindowedList, events: list[int]
    ) -> None:
        """enter runs the handler of the focused item after navigation."""
        handler = KeybindingHandler(windowed)
        handler.handle_key("j")
        handler.handle_key("down")

        handled, message = handler.handle_key("enter")

        assert handled is True
        assert message is None
        assert events == [2]

    def test_unbound_item_command_reports(self, windowed: WindowedList) -> None:
        """Bound keys whose command has no handler report it."""
        handler = KeybindingHandler(
            windowed, KeyMap.from_config(ListConfig(keybindings={"x": "delete"}))
        )

        handled, message = handler.handle_key("x")

        assert handled is True
        assert message == "No handler for 'delete'"

    def test_unassigned_key(self, windowed: WindowedList) -> None:
        """Unknown keys are reported as unassigned."""
        handler = KeybindingHandler(windowed)

        handled, message = handler.handle_key("z")

        assert handled is False
        assert message == "Key 'z' not assigned"

    def test_unassigned_special_key(self, windowed: WindowedList) -> None:
        """Special keys are shown with their repr."""
        handler = KeybindingHandler(windowed)

        handled, message = handler.handle_key("\x1b")

        assert handled is False
        assert message == "Key '\\x1b' not assigned"

    def test_quit(self, windowed: WindowedList) -> None:
        """q signals quit to the caller."""
        handler = KeybindingHandler(windowed)

        assert handler.handle_key("q") == (True, "quit")

    def test_bottom_on_empty_list(self) -> None:
        """Navigation aliases do nothing on an empty list."""
        windowed = WindowedList([], config=ListConfig(window_size=5))
        handler = KeybindingHandler(windowed)

        assert handler.handle_key("G") == (True, None)
        assert handler.handle_key("+") == (True, None)
