"""Refresh cycle for a windowed list.

WindowedList owns a ViewportEngine and a CommandRouter for one list of
items. Each input event is resolved completely (engine transition or
handler dispatch) before the next refresh cycle re-registers item
bindings against the new focus and produces a Frame for rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .config import ListConfig
from .engine import ViewportEngine
from .models import CommandHandler, NavigationCommand, ViewportState
from .router import CommandRouter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemContext:
    """What an item binder sees for one visible item during a refresh."""

    index: int
    item: Any
    is_focus: bool
    router: CommandRouter

    def register(self, command_name: str, handler: CommandHandler) -> bool:
        """Propose a handler for this item. Only the focused item's proposals stick."""
        return self.router.register_for_item(self.index, command_name, handler)


ItemBinder = Callable[[ItemContext], None]


@dataclass(frozen=True)
class VisibleItem:
    """An item inside the window, with its absolute index."""

    index: int
    item: Any
    is_focus: bool


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one refresh cycle."""

    state: ViewportState
    visible: tuple[VisibleItem, ...]
    bindings: tuple[str, ...]
    cycle: int

    @property
    def focused(self) -> VisibleItem | None:
        for entry in self.visible:
            if entry.is_focus:
                return entry
        return None


class WindowedList:
    """A list of items navigated through a fixed-size window."""

    def __init__(
        self,
        items: Sequence[Any],
        config: ListConfig | None = None,
        binder: ItemBinder | None = None,
    ) -> None:
        """Initialize list with focus on the first item.

        Args:
            items: Initial list contents
            config: List configuration, defaults to ListConfig()
            binder: Called for every visible item on every refresh so the
                item can register its command handlers
        """
        self.config = config or ListConfig()
        self._items: list[Any] = list(items)
        self._binder = binder
        self.engine = ViewportEngine(
            item_count=len(self._items),
            window_size=self.config.window_size,
            policy=self.config.scroll_policy,
            resize_preference=self.config.resize_preference,
            strict_invariants=self.config.strict_invariants,
        )
        self.router = CommandRouter()
        self._frame: Frame | None = None

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    @property
    def state(self) -> ViewportState:
        return self.engine.state

    @property
    def focus_index(self) -> int | None:
        return self.engine.focus_index

    @property
    def frame(self) -> Frame:
        """Most recent frame, refreshing once if none was produced yet."""
        if self._frame is None:
            return self.refresh()
        return self._frame

    def refresh(self, items: Sequence[Any] | None = None) -> Frame:
        """Run one refresh cycle.

        Args:
            items: New list contents, or None to keep the current ones

        Returns:
            Frame describing the visible window and live bindings
        """
        if items is not None:
            self._items = list(items)
            if self.engine.reconcile(len(self._items)) is not None:
                logger.debug(f"Reconciled viewport to {len(self._items)} item(s)")

        state = self.engine.state
        visible: list[VisibleItem] = []

        with self.router.refresh_cycle(self.engine.focus_index) as router:
            for index in state.visible_range:
                is_focus = index == state.focus_index
                item = self._items[index]
                if self._binder is not None:
                    self._binder(ItemContext(index, item, is_focus, router))
                visible.append(VisibleItem(index=index, item=item, is_focus=is_focus))

        self._frame = Frame(
            state=state,
            visible=tuple(visible),
            bindings=tuple(binding.command_name for binding in self.router.bindings),
            cycle=self.router.cycle,
        )
        return self._frame

    def handle_command(self, command: str, argument: int | None = None) -> bool:
        """Resolve one command without refreshing.

        Navigation commands drive the engine; anything else is dispatched to
        the focused item's handler.

        Args:
            command: Command identifier
            argument: Target index for goToIndex, new size for resizeWindow

        Returns:
            True if the viewport changed or a handler ran
        """
        navigation = NavigationCommand.parse(command)
        if navigation is None:
            return self.router.dispatch(command, tuple(self._items))

        if navigation is NavigationCommand.INCREMENT:
            result = self.engine.move_focus(1)
        elif navigation is NavigationCommand.DECREMENT:
            result = self.engine.move_focus(-1)
        elif argument is None:
            logger.debug(f"Ignoring {navigation.value} without an argument")
            return False
        elif navigation is NavigationCommand.GO_TO_INDEX:
            result = self.engine.jump_focus(argument)
        else:
            result = self.engine.resize_window(argument)

        if result is None:
            return False
        self.router.set_focus(self.engine.focus_index)
        return True

    def process(self, command: str, argument: int | None = None) -> Frame:
        """Handle a command and refresh, as one input event."""
        self.handle_command(command, argument)
        return self.refresh()

    def increment_index(self) -> bool:
        return self.handle_command(NavigationCommand.INCREMENT.value)

    def decrement_index(self) -> bool:
        return self.handle_command(NavigationCommand.DECREMENT.value)

    def go_to_index(self, index: int) -> bool:
        return self.handle_command(NavigationCommand.GO_TO_INDEX.value, index)

    def resize_window(self, size: int) -> bool:
        return self.handle_command(NavigationCommand.RESIZE_WINDOW.value, size)
