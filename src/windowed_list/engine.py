"""Viewport windowing engine.

This module owns the single ViewportState for a list and exposes the
operations that replace it: moving or jumping focus, resizing the window,
and reconciling with a new list length. Every accepted transition is
checked against the window invariants before it is adopted.
"""

from __future__ import annotations

import logging

from .exceptions import InvariantViolationError
from .models import ResizePreference, ScrollPolicyKind, ViewportState
from .policy import ScrollPolicy, create_policy
from .reconciler import reconcile_item_count

logger = logging.getLogger(__name__)


class ViewportEngine:
    """Tracks focus and the visible window over a list of ``item_count`` items."""

    def __init__(
        self,
        item_count: int,
        window_size: int | None = None,
        policy: ScrollPolicy | ScrollPolicyKind | str = ScrollPolicyKind.EDGE_FOLLOW,
        resize_preference: ResizePreference = ResizePreference.END_FIRST,
        strict_invariants: bool = False,
    ) -> None:
        """Initialize engine with focus on the first item.

        Args:
            item_count: Current length of the list
            window_size: Target window width, None to show the whole list
            policy: Scroll policy instance or kind
            resize_preference: Which end moves first when resizing
            strict_invariants: Raise on invariant violations instead of repairing
        """
        item_count = max(0, item_count)
        # Unsized windows track the list length until a resize fixes a size.
        self.auto_size = window_size is None
        if window_size is None:
            window_size = max(item_count, 1)
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")

        if not isinstance(policy, ScrollPolicy):
            policy = create_policy(policy)

        self.policy = policy
        self.resize_preference = resize_preference
        self.strict_invariants = strict_invariants
        self._state = ViewportState.initial(item_count, window_size)

    @property
    def state(self) -> ViewportState:
        """Current viewport snapshot."""
        return self._state

    @property
    def focus_index(self) -> int | None:
        """Focused index, or None when the list is empty."""
        if self._state.is_empty:
            return None
        return self._state.focus_index

    def set_policy(self, policy: ScrollPolicy | ScrollPolicyKind | str) -> None:
        """Swap the scroll policy. The current state is left untouched."""
        if not isinstance(policy, ScrollPolicy):
            policy = create_policy(policy)
        self.policy = policy

    def move_focus(self, delta: int) -> ViewportState | None:
        """Move focus one step up or down.

        Args:
            delta: +1 to move down, -1 to move up

        Returns:
            New state, or None if the move was rejected or changed nothing
        """
        if delta not in (-1, 1):
            logger.debug(f"Rejected move by {delta}: only single steps are allowed")
            return None
        if self._state.is_empty:
            logger.debug("Rejected move on empty list")
            return None

        requested = self._state.focus_index + delta
        if not 0 <= requested < self._state.item_count:
            return None
        return self._adopt(self.policy.apply(self._state, requested), "move")

    def jump_focus(self, target_index: int) -> ViewportState | None:
        """Move focus directly to ``target_index``.

        Args:
            target_index: Index to focus

        Returns:
            New state, or None if the target is out of range or already focused
        """
        if self._state.is_empty:
            logger.debug("Rejected jump on empty list")
            return None
        if not 0 <= target_index < self._state.item_count:
            logger.debug(
                f"Rejected jump to {target_index}: outside [0, {self._state.item_count - 1}]"
            )
            return None
        return self._adopt(self.policy.apply(self._state, target_index), "jump")

    def jump_to_start(self) -> ViewportState | None:
        return self.jump_focus(0)

    def jump_to_end(self) -> ViewportState | None:
        return self.jump_focus(self._state.item_count - 1)

    def resize_window(self, new_size: int) -> ViewportState | None:
        """Change the window width, keeping focus visible.

        The window grows or shrinks one unit at a time from the end chosen by
        ``resize_preference``, falling back to the other end when the
        preferred one is blocked by a list boundary or by focus.

        Args:
            new_size: Requested width; values above the item count are clamped

        Returns:
            New state, or None if the request was rejected or changed nothing
        """
        state = self._state
        if state.is_empty:
            return None
        if new_size <= 0:
            logger.debug(f"Rejected non-positive window size {new_size}")
            return None
        if new_size == state.window_size:
            return None
        self.auto_size = False

        target = min(new_size, state.item_count)
        start, end = self._resize_bounds(state, target)

        focus = state.focus_index
        if not start <= focus < end:
            self._report_violation(
                state.with_changes(window_start=start, window_end=end, window_size=target),
                [f"resize left focus {focus} outside [{start}, {end})"],
            )
            focus = min(max(focus, start), end - 1)

        next_state = state.with_changes(
            focus_index=focus,
            window_start=start,
            window_end=end,
            window_size=target,
        )
        return self._adopt(next_state, "resize")

    def _resize_bounds(self, state: ViewportState, target: int) -> tuple[int, int]:
        """Grow or shrink ``[start, end)`` to ``target`` one unit at a time."""
        start = state.window_start
        end = state.window_end
        focus = state.focus_index
        count = state.item_count
        end_first = self.resize_preference is ResizePreference.END_FIRST

        while end - start < target:
            can_grow_end = end < count
            can_grow_start = start > 0
            if can_grow_end and (end_first or not can_grow_start):
                end += 1
            elif can_grow_start:
                start -= 1
            else:
                break

        while end - start > target:
            can_shrink_end = focus < end - 1
            can_shrink_start = focus > start
            if can_shrink_end and (end_first or not can_shrink_start):
                end -= 1
            elif can_shrink_start:
                start += 1
            else:
                break

        return start, end

    def reconcile(self, new_item_count: int) -> ViewportState | None:
        """Restore window invariants after the list length changed.

        Args:
            new_item_count: Length of the list as now reported upstream

        Returns:
            New state, or None if nothing changed
        """
        if new_item_count == self._state.item_count:
            return None
        state = self._state
        if self.auto_size:
            state = state.with_changes(window_size=max(new_item_count, 1))
        return self._adopt(reconcile_item_count(state, new_item_count), "reconcile")

    def _adopt(self, next_state: ViewportState, operation: str) -> ViewportState | None:
        """Validate and install ``next_state``.

        Returns:
            The installed state, or None when it equals the current one
        """
        problems = next_state.violations()
        if problems:
            self._report_violation(next_state, problems)
            next_state = self._repair(next_state)

        if next_state == self._state:
            return None

        logger.debug(
            f"{operation}: focus={next_state.focus_index} "
            f"window=[{next_state.window_start}, {next_state.window_end}) "
            f"items={next_state.item_count}"
        )
        self._state = next_state
        return next_state

    def _report_violation(self, state: ViewportState, problems: list[str]) -> None:
        logger.error(
            f"Viewport invariant violated ({self.policy!r}): {'; '.join(problems)}",
            extra={"extra_context": state.to_dict()},
        )
        if self.strict_invariants:
            raise InvariantViolationError(
                f"Viewport invariant violated: {'; '.join(problems)}", problems
            )

    @staticmethod
    def _repair(state: ViewportState) -> ViewportState:
        """Clamp a broken state back into a valid one."""
        if state.item_count <= 0:
            return ViewportState.empty(state.window_size)
        width = state.target_width
        start = min(max(state.window_start, 0), state.item_count - width)
        end = start + width
        focus = min(max(state.focus_index, start), end - 1)
        return state.with_changes(focus_index=focus, window_start=start, window_end=end)
