"""Rich renderers for windowed list frames."""

from .list_view import render_list
from .scrollbar import ScrollbarGeometry, compute_scrollbar, render_scrollbar

__all__ = [
    "ScrollbarGeometry",
    "compute_scrollbar",
    "render_list",
    "render_scrollbar",
]
