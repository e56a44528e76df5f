"""Scroll indicator geometry and rendering.

The indicator is a derived display quantity: its bar length is proportional
to the visible share of the list and its padding splits the remaining
height between the items hidden above and below the window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from rich.text import Text

from ..models import ViewportState


@dataclass(frozen=True)
class ScrollbarGeometry:
    """Line counts for the three segments of a scroll indicator."""

    before: int  # Blank lines above the bar
    bar: int  # Lines occupied by the bar
    after: int  # Blank lines below the bar

    @property
    def total(self) -> int:
        return self.before + self.bar + self.after


def compute_scrollbar(state: ViewportState, height: int) -> ScrollbarGeometry | None:
    """Compute scroll indicator segments for a viewport.

    Args:
        state: Viewport snapshot
        height: Lines available for the indicator

    Returns:
        Geometry, or None when the whole list fits and no indicator is needed

    Examples:
        >>> state = ViewportState(focus_index=0, window_start=0, window_end=5,
        ...                       window_size=5, item_count=20)
        >>> compute_scrollbar(state, 10)
        ScrollbarGeometry(before=0, bar=3, after=7)
    """
    count = state.item_count
    if count <= 0 or state.window_size >= count or height <= 0:
        return None

    bar = max(0, math.ceil(height * (min(count, state.window_size) / count)))
    before = max(0, math.floor(height * (state.window_start / count)))
    after = max(0, math.floor(height * ((count - state.window_end) / count)))
    return ScrollbarGeometry(before=before, bar=bar, after=after)


def render_scrollbar(geometry: ScrollbarGeometry, bar_style: str = "on white") -> Text:
    """Build a one column Rich Text for the indicator.

    Args:
        geometry: Segment line counts
        bar_style: Style applied to bar cells

    Returns:
        Text with one line per segment cell
    """
    text = Text()
    lines = [("", " ")] * geometry.before
    lines += [(bar_style, " ")] * geometry.bar
    lines += [("", " ")] * geometry.after
    for position, (style, cell) in enumerate(lines):
        if position:
            text.append("\n")
        text.append(cell, style=style or None)
    return text
