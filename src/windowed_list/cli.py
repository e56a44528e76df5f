"""CLI entry point for replaying key sequences against a demo list.

This module handles command-line argument parsing, logging setup, and
prints the frame produced after the keys have been applied.
"""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import sys
from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console

from .config import ListConfig, load_config
from .controller import ItemContext, WindowedList
from .exceptions import ConfigError, WindowedListError
from .keybindings import KeybindingHandler, KeyMap
from .models import CommandEvent, ScrollPolicyKind
from .views.list_view import render_list

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "windowed_list"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with viewport context kept apart from the source."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
            "context": dict(getattr(record, "extra_context", None) or {}),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def _setup_logging(log_file: Path, debug: bool) -> logging.Handler:
    """Send the package's log records to a rotating JSON file.

    Only loggers under ``windowed_list`` are captured; the root logger is
    left to the host application.

    Returns:
        The installed file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if debug else logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers[:]:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            package_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(level)
    package_logger.addHandler(file_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )
    return file_handler


def _expand_keys(tokens: list[str], keymap: KeyMap) -> Iterator[str]:
    """Split runs like ``jjjG`` into single keys.

    Tokens bound in ``keymap`` (``down``, ``enter``, ...) are kept whole.
    """
    for token in tokens:
        if token in keymap or len(token) <= 1:
            yield token
        else:
            yield from token


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="windowed-list",
        description="Replay key presses against a demo windowed list and print the result",
    )

    parser.add_argument(
        "--items",
        type=int,
        default=21,
        help="Number of demo items (default: 21)",
    )

    parser.add_argument(
        "--window-size",
        type=int,
        default=None,
        help="Visible window size (default: from config, or 5)",
    )

    parser.add_argument(
        "--policy",
        choices=[kind.value for kind in ScrollPolicyKind],
        default=None,
        help="Scroll policy (default: from config, or edge_follow)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON list config",
    )

    parser.add_argument(
        "--keys",
        nargs="*",
        default=[],
        metavar="KEY",
        help="Key presses to replay, e.g. --keys jjjG or --keys j down enter",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write JSON logs to this file",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> ListConfig:
    """Merge the config file with command line overrides."""
    config = load_config(args.config) if args.config else ListConfig(window_size=5)

    if args.window_size is not None:
        if args.window_size <= 0:
            raise ConfigError(f"--window-size must be positive, got {args.window_size}")
        config = replace(config, window_size=args.window_size)
    if args.policy is not None:
        config = replace(config, scroll_policy=ScrollPolicyKind(args.policy))
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = _parse_args(argv)
    console = Console()

    if args.log_file:
        _setup_logging(args.log_file, args.debug)

    try:
        config = _build_config(args)
    except ConfigError as err:
        console.print(f"[red]Error: {err}[/red]")
        logger.error("Invalid configuration", extra={"extra_context": {"error": str(err)}})
        return 1

    def bind_item(ctx: ItemContext) -> None:
        def on_enter(event: CommandEvent) -> None:
            console.print(f"Event for item: {event.item_index}")

        ctx.register("enter", on_enter)

    items = [f"This is item: {i}" for i in range(max(0, args.items))]
    windowed_list = WindowedList(items, config=config, binder=bind_item)
    windowed_list.refresh()
    handler = KeybindingHandler(windowed_list)

    try:
        for key in _expand_keys(args.keys, handler.keymap):
            handled, message = handler.handle_key(key)
            logger.debug(
                "Key replayed",
                extra={"extra_context": {"key": key, "handled": handled, "message": message}},
            )
            if message == "quit":
                break
            if message:
                console.print(f"[dim]{message}[/dim]")
    except WindowedListError as err:
        console.print(f"[red]Error: {err}[/red]")
        logger.error("Replay failed", exc_info=True)
        return 1

    console.print(
        render_list(
            windowed_list.frame,
            scroll_bar=config.scroll_bar,
            scroll_bar_height=config.scroll_bar_height,
            title=f"Items [dim]({config.scroll_policy.value})[/dim]",
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
