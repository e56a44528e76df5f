"""List view renderer for a windowed list frame.

This module provides the render_list function that builds a Rich Panel
from a Frame: the visible items with the focused one highlighted, plus an
optional scroll indicator column.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..controller import Frame
from .scrollbar import compute_scrollbar, render_scrollbar


def render_list(
    frame: Frame,
    render_item: Callable[[Any], str] = str,
    scroll_bar: bool = True,
    scroll_bar_height: int | None = None,
    title: str | None = None,
) -> Panel:
    """Build Rich Panel displaying the visible window of a list.

    Args:
        frame: Frame produced by WindowedList.refresh()
        render_item: Converts an item to its display label
        scroll_bar: Whether to draw the scroll indicator
        scroll_bar_height: Indicator height, defaults to the number of visible rows
        title: Optional panel title

    Returns:
        Rich Panel component ready for rendering
    """
    state = frame.state

    items_text = Text()
    for position, entry in enumerate(frame.visible):
        if position:
            items_text.append("\n")
        label = render_item(entry.item)
        if entry.is_focus:
            items_text.append(f"> {label}", style="reverse")
        else:
            items_text.append(f"  {label}")

    if not frame.visible:
        items_text.append("No items", style="dim italic")

    grid = Table.grid(expand=True)
    grid.add_column(ratio=1)

    geometry = None
    if scroll_bar:
        height = scroll_bar_height or len(frame.visible)
        geometry = compute_scrollbar(state, height)

    if geometry is not None:
        grid.add_column(width=1, no_wrap=True)
        grid.add_row(items_text, render_scrollbar(geometry))
    else:
        grid.add_row(items_text)

    counter = (
        f"{state.focus_index + 1}/{state.item_count}" if not state.is_empty else "0/0"
    )
    panel_title = f"{title} [dim]({counter})[/dim]" if title else f"[dim]({counter})[/dim]"

    return Panel(grid, title=panel_title, border_style="blue")
