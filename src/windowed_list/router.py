"""Focus-scoped command routing.

Every visible item proposes its command handlers on every refresh cycle,
but only the focused item's proposals are kept. The router holds at most
one live handler per command name; registering replaces the previous
handler outright so a closure from an older cycle can never fire.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from .exceptions import RouterUsageError
from .models import CommandBinding, CommandEvent, CommandHandler

logger = logging.getLogger(__name__)


class CommandRouter:
    """Routes named commands to the handlers of the focused item."""

    def __init__(self) -> None:
        self._bindings: dict[str, CommandBinding] = {}
        self._focus_index: int | None = None
        self._cycle = 0
        self._in_cycle = False
        self._refreshed: set[str] = set()

    @property
    def has_focus(self) -> bool:
        """True when an item currently holds focus."""
        return self._focus_index is not None

    @property
    def focus_index(self) -> int:
        """Index of the item whose handlers are live.

        Raises:
            RouterUsageError: If no item holds focus
        """
        if self._focus_index is None:
            raise RouterUsageError("No item holds focus; router has no active focus context")
        return self._focus_index

    @property
    def cycle(self) -> int:
        """Number of refresh cycles started so far."""
        return self._cycle

    @property
    def in_cycle(self) -> bool:
        return self._in_cycle

    def set_focus(self, focus_index: int | None) -> None:
        """Record a focus change coming from the viewport engine.

        Bindings owned by any other item are evicted immediately, so a
        dispatch between the focus change and the next refresh cycle cannot
        reach the previously focused item.

        Args:
            focus_index: New focused index, None when the list is empty
        """
        if focus_index == self._focus_index:
            return

        logger.debug(f"Router focus {self._focus_index} -> {focus_index}")
        self._focus_index = focus_index
        stale = [
            name
            for name, binding in self._bindings.items()
            if binding.item_index != focus_index
        ]
        for name in stale:
            del self._bindings[name]

    def begin_cycle(self, focus_index: int | None) -> None:
        """Open a registration pass evaluated against ``focus_index``.

        Raises:
            RouterUsageError: If a cycle is already open
        """
        if self._in_cycle:
            raise RouterUsageError("Refresh cycle already in progress")
        self.set_focus(focus_index)
        self._cycle += 1
        self._in_cycle = True
        self._refreshed = set()

    def end_cycle(self) -> None:
        """Close the registration pass, dropping bindings that were not renewed.

        Raises:
            RouterUsageError: If no cycle is open
        """
        if not self._in_cycle:
            raise RouterUsageError("No refresh cycle in progress")
        for name in list(self._bindings):
            if name not in self._refreshed:
                logger.debug(f"Dropping binding for '{name}' not renewed in cycle {self._cycle}")
                del self._bindings[name]
        self._in_cycle = False

    @contextmanager
    def refresh_cycle(self, focus_index: int | None) -> Iterator[CommandRouter]:
        """Context manager wrapping one registration pass.

        Example:
            >>> router = CommandRouter()
            >>> with router.refresh_cycle(0) as cycle:
            ...     cycle.register_for_item(0, "enter", print)
        """
        self.begin_cycle(focus_index)
        try:
            yield self
        finally:
            self.end_cycle()

    def register_for_item(
        self, item_index: int, command_name: str, handler: CommandHandler
    ) -> bool:
        """Propose a handler for ``command_name`` on behalf of an item.

        Proposals from items without focus are discarded. For the focused
        item any existing handler for the command is removed first, whoever
        registered it, and ``handler`` becomes the only live one.

        Args:
            item_index: Index of the proposing item
            command_name: Command the handler reacts to
            handler: Callable receiving a CommandEvent

        Returns:
            True if the handler is now live, False if it was discarded

        Raises:
            RouterUsageError: If called outside a refresh cycle
        """
        if not self._in_cycle:
            raise RouterUsageError(
                f"register_for_item({item_index}, '{command_name}') called outside a refresh cycle"
            )
        if self._focus_index is None or item_index != self._focus_index:
            return False

        self._bindings.pop(command_name, None)
        self._bindings[command_name] = CommandBinding(
            item_index=item_index,
            command_name=command_name,
            handler=handler,
            cycle=self._cycle,
        )
        self._refreshed.add(command_name)
        return True

    def dispatch(self, command_name: str, items: Sequence[Any] = ()) -> bool:
        """Invoke the live handler for ``command_name``, if any.

        Handler exceptions propagate to the caller.

        Args:
            command_name: Command to run
            items: Current list snapshot handed to the handler

        Returns:
            True if a handler ran, False if no handler is registered
        """
        binding = self._bindings.get(command_name)
        if binding is None or binding.item_index != self._focus_index:
            logger.debug(f"No live handler for '{command_name}'")
            return False

        event = CommandEvent(
            command_name=command_name,
            item_index=binding.item_index,
            items=items,
        )
        binding.handler(event)
        return True

    def handler_for(self, command_name: str) -> CommandHandler | None:
        """Return the live handler for ``command_name``.

        Raises:
            RouterUsageError: If no item holds focus
        """
        if self._focus_index is None:
            raise RouterUsageError("No item holds focus; handler state is undefined")
        binding = self._bindings.get(command_name)
        return binding.handler if binding else None

    @property
    def bindings(self) -> list[CommandBinding]:
        """Snapshot of live bindings ordered by command name."""
        return [self._bindings[name] for name in sorted(self._bindings)]
