"""Configuration for windowed lists.

Settings may be built in code or loaded from a JSON file. Every value is
validated when the config is created so later code can trust it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigError
from .models import ResizePreference, ScrollPolicyKind

_KNOWN_KEYS = {
    "window_size",
    "scroll_policy",
    "resize_preference",
    "scroll_bar",
    "scroll_bar_height",
    "vi_keys",
    "arrow_keys",
    "keybindings",
    "strict_invariants",
}


def _optional_positive_int(payload: dict, key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer or null, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _bool(payload: dict, key: str, default: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be a boolean, got {value!r}")
    return value


def _enum(payload: dict, key: str, enum_type: Any, default: Any) -> Any:
    raw = payload.get(key, default.value)
    try:
        return enum_type(raw)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"{key} must be one of: {choices}; got {raw!r}") from None


@dataclass(frozen=True)
class ListConfig:
    """Runtime configuration for a windowed list."""

    window_size: int | None = None
    scroll_policy: ScrollPolicyKind = ScrollPolicyKind.EDGE_FOLLOW
    resize_preference: ResizePreference = ResizePreference.END_FIRST
    scroll_bar: bool = True
    scroll_bar_height: int | None = None
    vi_keys: bool = True
    arrow_keys: bool = True
    keybindings: dict[str, str] = field(default_factory=dict)
    strict_invariants: bool = False

    @classmethod
    def from_dict(cls, payload: dict) -> ListConfig:
        """Create a ListConfig from a raw dictionary.

        Raises:
            ConfigError: If a key is unknown or a value is invalid
        """
        if not isinstance(payload, dict):
            raise ConfigError(f"config must be an object, got {type(payload).__name__}")

        unknown = sorted(set(payload) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

        keybindings_raw = payload.get("keybindings", {})
        if not isinstance(keybindings_raw, dict):
            raise ConfigError("keybindings must be an object")
        keybindings: dict[str, str] = {}
        for key, command in keybindings_raw.items():
            if not isinstance(command, str) or not command:
                raise ConfigError(f"keybindings[{key!r}] must be a non-empty command name")
            keybindings[str(key)] = command

        return cls(
            window_size=_optional_positive_int(payload, "window_size"),
            scroll_policy=_enum(
                payload, "scroll_policy", ScrollPolicyKind, ScrollPolicyKind.EDGE_FOLLOW
            ),
            resize_preference=_enum(
                payload, "resize_preference", ResizePreference, ResizePreference.END_FIRST
            ),
            scroll_bar=_bool(payload, "scroll_bar", True),
            scroll_bar_height=_optional_positive_int(payload, "scroll_bar_height"),
            vi_keys=_bool(payload, "vi_keys", True),
            arrow_keys=_bool(payload, "arrow_keys", True),
            keybindings=keybindings,
            strict_invariants=_bool(payload, "strict_invariants", False),
        )

    def to_dict(self) -> dict:
        return {
            "window_size": self.window_size,
            "scroll_policy": self.scroll_policy.value,
            "resize_preference": self.resize_preference.value,
            "scroll_bar": self.scroll_bar,
            "scroll_bar_height": self.scroll_bar_height,
            "vi_keys": self.vi_keys,
            "arrow_keys": self.arrow_keys,
            "keybindings": dict(self.keybindings),
            "strict_invariants": self.strict_invariants,
        }


def load_config(path: Path) -> ListConfig:
    """Load configuration from the provided path.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as err:
        raise ConfigError(f"Cannot read config file {path}: {err}") from err
    except json.JSONDecodeError as err:
        raise ConfigError(f"Invalid JSON in {path}: {err}") from err
    return ListConfig.from_dict(data)
