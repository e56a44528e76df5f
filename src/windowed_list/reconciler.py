"""Reconcile a viewport state with a new list length.

When items are removed upstream the window may hang past the end of the
list. The window is slid left as a whole, with focus moving in lock-step,
so focus keeps the same position relative to the window instead of being
reset. Growth only needs the width to be trued up.
"""

from __future__ import annotations

import logging

from .models import ViewportState
from .policy import true_up_width

logger = logging.getLogger(__name__)


def reconcile_item_count(state: ViewportState, new_item_count: int) -> ViewportState:
    """Adjust a previously valid state to a changed item count.

    Args:
        state: State computed for the old item count
        new_item_count: Length of the list as now reported upstream

    Returns:
        State satisfying the window invariants for ``new_item_count``
    """
    new_item_count = max(0, new_item_count)

    if new_item_count == 0:
        logger.debug("List emptied, resetting viewport")
        return ViewportState.empty(state.window_size)

    if state.is_empty:
        logger.debug(f"List populated with {new_item_count} item(s)")
        return ViewportState.initial(new_item_count, state.window_size)

    start = state.window_start
    end = state.window_end
    focus = state.focus_index

    if end > new_item_count:
        while end > new_item_count and start > 0:
            start -= 1
            end -= 1
            focus -= 1
        logger.debug(
            f"Slid window to [{start}, {end}) after list shrank "
            f"{state.item_count} -> {new_item_count}"
        )

    # Sliding stops at the top of the list; whatever still overhangs is cut.
    end = min(end, new_item_count)
    if focus >= end:
        focus = end - 1

    resized = state.with_changes(
        focus_index=focus,
        window_start=start,
        window_end=end,
        item_count=new_item_count,
    )
    return true_up_width(resized)
