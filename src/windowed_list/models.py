"""Data models for viewport state and command routing.

ViewportState is the immutable snapshot replaced on every accepted
transition. The enums name the interchangeable strategies consumed by the
engine, and the command records describe per-refresh bindings.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class ScrollPolicyKind(Enum):
    """Window adjustment strategy."""

    EDGE_FOLLOW = "edge_follow"
    CENTERED = "centered"


class ResizePreference(Enum):
    """Which end of the window moves first when resizing."""

    END_FIRST = "end_first"
    START_FIRST = "start_first"


class NavigationCommand(str, Enum):
    """Command identifiers forwarded to the viewport engine."""

    INCREMENT = "increment"
    DECREMENT = "decrement"
    GO_TO_INDEX = "goToIndex"
    RESIZE_WINDOW = "resizeWindow"

    @classmethod
    def parse(cls, command: str) -> NavigationCommand | None:
        """Return the navigation command for an identifier, or None."""
        try:
            return cls(command)
        except ValueError:
            return None


@dataclass(frozen=True)
class ViewportState:
    """Snapshot of the visible window over a list.

    ``window_end`` is exclusive. ``window_size`` is the requested width and
    may exceed ``item_count``, in which case the effective width is
    ``item_count``.
    """

    focus_index: int
    window_start: int
    window_end: int
    window_size: int
    item_count: int

    @classmethod
    def empty(cls, window_size: int) -> ViewportState:
        """Create the state for a list with no items."""
        return cls(
            focus_index=0,
            window_start=0,
            window_end=0,
            window_size=window_size,
            item_count=0,
        )

    @classmethod
    def initial(cls, item_count: int, window_size: int) -> ViewportState:
        """Create the starting state: focus on the first item, window at the top."""
        if item_count <= 0:
            return cls.empty(window_size)
        return cls(
            focus_index=0,
            window_start=0,
            window_end=min(window_size, item_count),
            window_size=window_size,
            item_count=item_count,
        )

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    @property
    def width(self) -> int:
        """Current number of visible indices."""
        return self.window_end - self.window_start

    @property
    def target_width(self) -> int:
        """Width the window must have for the current item count."""
        return min(self.window_size, self.item_count)

    @property
    def visible_range(self) -> range:
        return range(self.window_start, self.window_end)

    def with_changes(self, **changes: int) -> ViewportState:
        return replace(self, **changes)

    def violations(self) -> list[str]:
        """List every broken invariant, empty when the state is consistent.

        Returns:
            Human readable descriptions of failed checks
        """
        problems: list[str] = []

        if self.item_count == 0:
            if self.window_start != 0 or self.window_end != 0:
                problems.append(
                    f"empty list must have an empty window, got "
                    f"[{self.window_start}, {self.window_end})"
                )
            return problems

        if not self.window_start <= self.focus_index < self.window_end:
            problems.append(
                f"focus {self.focus_index} outside window "
                f"[{self.window_start}, {self.window_end})"
            )
        if self.width != self.target_width:
            problems.append(f"window width {self.width} != expected {self.target_width}")
        if self.window_start < 0:
            problems.append(f"window start {self.window_start} is negative")
        if self.window_end > self.item_count:
            problems.append(
                f"window end {self.window_end} exceeds item count {self.item_count}"
            )
        return problems

    def to_dict(self) -> dict[str, int]:
        return {
            "focus_index": self.focus_index,
            "window_start": self.window_start,
            "window_end": self.window_end,
            "window_size": self.window_size,
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class CommandEvent:
    """Arguments passed to a command handler at dispatch time.

    Handlers read the target item from ``items`` by ``item_index`` instead
    of capturing list state when they are created.
    """

    command_name: str
    item_index: int
    items: Sequence[Any] = ()

    @property
    def item(self) -> Any:
        """The item the command targets, resolved against the current list."""
        if 0 <= self.item_index < len(self.items):
            return self.items[self.item_index]
        return None


CommandHandler = Callable[[CommandEvent], Any]


@dataclass(frozen=True)
class CommandBinding:
    """A handler registered by the focused item during one refresh cycle."""

    item_index: int
    command_name: str
    handler: CommandHandler = field(compare=False)
    cycle: int = 0
