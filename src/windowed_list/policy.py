"""Scroll policies that decide where the window sits for a requested focus.

Both policies are pure: they receive the current state and a requested
focus index and return the next state without touching the engine. Each
one first trues up the window width for the current item count, then
applies its own focus-driven shift.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .models import ScrollPolicyKind, ViewportState

logger = logging.getLogger(__name__)


def true_up_width(state: ViewportState) -> ViewportState:
    """Bring the window width back to ``min(window_size, item_count)``.

    The window is shrunk or grown symmetrically, alternating between the two
    ends. Shrinking never cuts off the focused index while another end is
    available. Bounds are clamped into ``[0, item_count]`` first.

    Args:
        state: State whose width may be stale (e.g. after the list shrank)

    Returns:
        State with the expected width and focus inside the window
    """
    count = state.item_count
    if count <= 0:
        return ViewportState.empty(state.window_size)

    target = min(state.window_size, count)
    end = min(max(state.window_end, 0), count)
    start = min(max(state.window_start, 0), end)
    focus = state.focus_index

    if end - start == target and start <= focus < end:
        return state

    from_end = True
    while end - start > target:
        end_free = end - 1 > focus
        start_free = start < focus
        if (from_end and end_free) or not start_free:
            end -= 1
        else:
            start += 1
        from_end = not from_end

    from_end = True
    while end - start < target:
        if (from_end and end < count) or start == 0:
            end += 1
        else:
            start -= 1
        from_end = not from_end

    focus = min(max(focus, start), end - 1)
    return state.with_changes(focus_index=focus, window_start=start, window_end=end)


class ScrollPolicy(ABC):
    """Base class for window adjustment strategies."""

    kind: ScrollPolicyKind

    def apply(self, state: ViewportState, requested_focus: int) -> ViewportState:
        """Compute the state that puts focus on ``requested_focus``.

        Args:
            state: Current viewport state
            requested_focus: Focus index to move to, already range checked

        Returns:
            Next viewport state
        """
        trued = true_up_width(state)
        if trued.is_empty:
            return trued
        return self._shift(trued, requested_focus)

    @abstractmethod
    def _shift(self, state: ViewportState, requested_focus: int) -> ViewportState:
        """Shift a correctly sized window for the requested focus."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EdgeFollowPolicy(ScrollPolicy):
    """Move the window the minimum amount needed to keep focus visible.

    A jump is treated as a series of single edge crossings, so the window
    always ends with focus on the edge it crossed.
    """

    kind = ScrollPolicyKind.EDGE_FOLLOW

    def _shift(self, state: ViewportState, requested_focus: int) -> ViewportState:
        start = state.window_start
        end = state.window_end

        if requested_focus == end:
            start += 1
            end += 1
        elif requested_focus == start - 1:
            start -= 1
            end -= 1
        elif requested_focus > end:
            while requested_focus >= end and end < state.item_count:
                start += 1
                end += 1
        elif requested_focus < start:
            while requested_focus < start and start > 0:
                start -= 1
                end -= 1

        return state.with_changes(
            focus_index=requested_focus, window_start=start, window_end=end
        )


class CenteredPolicy(ScrollPolicy):
    """Keep focus near the middle of the window.

    The window follows focus as soon as it passes the midpoint, one unit at
    a time, until focus is centered or the window reaches an end of the list.
    """

    kind = ScrollPolicyKind.CENTERED

    def _shift(self, state: ViewportState, requested_focus: int) -> ViewportState:
        if requested_focus == state.focus_index:
            return state

        start = state.window_start
        end = state.window_end
        count = state.item_count

        while requested_focus > (start + end) // 2 and end < count:
            start += 1
            end += 1
        while requested_focus < (start + end) // 2 and start > 0:
            start -= 1
            end -= 1

        return state.with_changes(
            focus_index=requested_focus, window_start=start, window_end=end
        )


_POLICIES: dict[ScrollPolicyKind, type[ScrollPolicy]] = {
    ScrollPolicyKind.EDGE_FOLLOW: EdgeFollowPolicy,
    ScrollPolicyKind.CENTERED: CenteredPolicy,
}


def create_policy(kind: ScrollPolicyKind | str) -> ScrollPolicy:
    """Create a scroll policy instance by kind.

    Args:
        kind: Policy kind or its string value ("edge_follow", "centered")

    Returns:
        Policy instance

    Raises:
        ValueError: If the kind is not recognized
    """
    if isinstance(kind, str):
        kind = ScrollPolicyKind(kind)
    policy = _POLICIES[kind]()
    logger.debug(f"Created scroll policy {policy!r}")
    return policy
