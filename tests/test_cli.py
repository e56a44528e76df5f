"""Tests for the replay CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from windowed_list.cli import main


@pytest.fixture
def restore_package_logger() -> Iterator[None]:
    """Put the package logger back the way the CLI found it."""
    package_logger = logging.getLogger("windowed_list")
    handlers, level = package_logger.handlers[:], package_logger.level
    yield
    for handler in package_logger.handlers[:]:
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    package_logger.setLevel(level)


class TestMain:
    """Tests for main()."""

    def test_replays_keys(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Replayed keys move focus before the final frame is printed."""
        exit_code = main(["--items", "10", "--window-size", "3", "--keys", "j", "j", "j"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "> This is item: 3" in output
        assert "This is item: 0" not in output

    def test_enter_runs_item_handler(self, capsys: pytest.CaptureFixture[str]) -> None:
        """enter triggers the focused item's handler."""
        exit_code = main(["--items", "10", "--keys", "j", "enter"])

        assert exit_code == 0
        assert "Event for item: 1" in capsys.readouterr().out

    def test_quit_stops_replay(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Keys after q are not replayed."""
        main(["--items", "10", "--keys", "j", "q", "j", "j"])

        assert "> This is item: 1" in capsys.readouterr().out

    def test_centered_policy(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--policy selects the scroll policy."""
        exit_code = main(["--items", "20", "--policy", "centered", "--keys", "j", "j", "j"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "centered" in output
        assert "This is item: 1" in output
        assert "This is item: 0" not in output

    def test_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Settings are read from a JSON config."""
        path = tmp_path / "list.json"
        path.write_text(json.dumps({"window_size": 2, "scroll_bar": False}), encoding="utf-8")

        exit_code = main(["--items", "10", "--config", str(path)])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "This is item: 1" in output
        assert "This is item: 2" not in output

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Invalid config exits with 1."""
        path = tmp_path / "list.json"
        path.write_text(json.dumps({"window_size": 0}), encoding="utf-8")

        assert main(["--config", str(path)]) == 1
        assert "window_size must be positive" in capsys.readouterr().out

    def test_invalid_window_size_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A non-positive --window-size exits with 1."""
        assert main(["--window-size", "0"]) == 1

    def test_log_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], restore_package_logger: None
    ) -> None:
        """--log-file writes JSON log lines."""
        log_file = tmp_path / "logs" / "list.log"

        assert main(["--items", "5", "--keys", "j", "--log-file", str(log_file), "--debug"]) == 0

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert lines
        first = json.loads(lines[0])
        assert first["event"] == "Logging initialized"
        assert first["logger"] == "windowed_list.cli"
        assert first["source"].startswith("cli:_setup_logging:")
        assert first["context"]["debug"] is True

    def test_log_file_leaves_root_logger_alone(
        self, tmp_path: Path, restore_package_logger: None
    ) -> None:
        """Only the package logger gets the file handler."""
        root_handlers = logging.getLogger().handlers[:]

        main(["--items", "5", "--log-file", str(tmp_path / "list.log")])

        assert logging.getLogger().handlers == root_handlers
        assert logging.getLogger("windowed_list").handlers

    def test_key_runs_are_split(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A run like jjj replays as three separate presses."""
        exit_code = main(["--items", "10", "--window-size", "3", "--keys", "jjj"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "> This is item: 3" in output
        assert "(4/10)" in output

    def test_named_keys_stay_whole(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Bound key names such as down and enter are not split."""
        exit_code = main(["--items", "10", "--keys", "down", "jj", "enter"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "Event for item: 3" in output
        assert "Key 'd' not assigned" not in output
