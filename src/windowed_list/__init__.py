"""Windowed navigation over lists too large to show at once.

The viewport engine keeps a window of visible indices and a focused index
consistent as focus moves, the window is resized, or the list changes
length. The command router makes sure only the focused item reacts to
item commands.
"""

from __future__ import annotations

from .config import ListConfig, load_config
from .controller import Frame, ItemContext, VisibleItem, WindowedList
from .engine import ViewportEngine
from .exceptions import (
    ConfigError,
    InvariantViolationError,
    RouterUsageError,
    WindowedListError,
)
from .keybindings import KeybindingHandler, KeyMap
from .models import (
    CommandBinding,
    CommandEvent,
    NavigationCommand,
    ResizePreference,
    ScrollPolicyKind,
    ViewportState,
)
from .policy import CenteredPolicy, EdgeFollowPolicy, ScrollPolicy, create_policy, true_up_width
from .reconciler import reconcile_item_count
from .router import CommandRouter

__all__ = [
    "CenteredPolicy",
    "CommandBinding",
    "CommandEvent",
    "CommandRouter",
    "ConfigError",
    "EdgeFollowPolicy",
    "Frame",
    "InvariantViolationError",
    "ItemContext",
    "KeyMap",
    "KeybindingHandler",
    "ListConfig",
    "NavigationCommand",
    "ResizePreference",
    "RouterUsageError",
    "ScrollPolicy",
    "ScrollPolicyKind",
    "ViewportEngine",
    "ViewportState",
    "VisibleItem",
    "WindowedList",
    "WindowedListError",
    "create_policy",
    "load_config",
    "reconcile_item_count",
    "true_up_width",
]
