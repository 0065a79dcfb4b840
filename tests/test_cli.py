"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from randomtodo.cli import _setup_logging, app


runner = CliRunner()


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


def _args(vault: Path, settings_file: Path) -> list[str]:
    return ["--vault", str(vault), "--settings", str(settings_file)]


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        with patch("randomtodo.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        with patch("randomtodo.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestFileCommand:
    """Tests for the file command."""

    def test_prints_matching_document(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["file", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "inbox.md" in result.stdout or "garden.md" in result.stdout
        assert "journal.md" not in result.stdout

    def test_no_todos(self, tmp_path: Path, settings_file: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(app, ["file", *_args(empty, settings_file)])

        assert result.exit_code == 0
        assert "No to-do items found" in result.stdout

    def test_missing_vault(self, tmp_path: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["file", *_args(tmp_path / "missing", settings_file)])

        assert result.exit_code != 0

    @patch("randomtodo.cli.SystemNavigator")
    def test_open_flag_uses_system_navigator(
        self, mock_navigator_class: MagicMock, vault: Path, settings_file: Path
    ) -> None:
        result = runner.invoke(app, ["file", "--open", *_args(vault, settings_file)])

        assert result.exit_code == 0
        mock_navigator_class.return_value.navigate.assert_called_once()


class TestItemCommand:
    """Tests for the item command."""

    def test_prints_location(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["item", *_args(vault, settings_file)])

        assert result.exit_code == 0
        found = re.search(r"(inbox|garden)\.md:(\d+):(\d+)", result.stdout)
        assert found is not None
        assert (found.group(2), found.group(3)) in {("1", "9"), ("3", "14"), ("3", "15")}

    def test_no_todos(self, tmp_path: Path, settings_file: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(app, ["item", *_args(empty, settings_file)])

        assert result.exit_code == 0
        assert "No to-do items found" in result.stdout


class TestListCommand:
    """Tests for the list command."""

    def test_lists_all_items(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["list", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "inbox.md" in result.stdout
        assert "3 to-do items in 2 documents" in result.stdout

    def test_respects_saved_pattern(self, vault: Path, settings_file: Path) -> None:
        settings_file.write_text(json.dumps({"todoPattern": "nothing"}))

        result = runner.invoke(app, ["list", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "journal.md" in result.stdout
        assert "1 to-do items in 1 documents" in result.stdout


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_defaults(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["config", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "To-do item pattern:" in result.stdout
        assert "Status bar count: off" in result.stdout
        assert not settings_file.exists()

    def test_set_pattern(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["config", "--pattern", "TODO", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert json.loads(settings_file.read_text())["todoPattern"] == "TODO"

    def test_invalid_pattern(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["config", "--pattern", "(bad", *_args(vault, settings_file)])

        assert result.exit_code == 1
        assert "Invalid to-do pattern" in result.stdout
        assert not settings_file.exists()

    def test_shows_pattern_in_use_when_saved_one_is_invalid(
        self, vault: Path, settings_file: Path
    ) -> None:
        settings_file.write_text(json.dumps({"todoPattern": "(bad"}))

        result = runner.invoke(app, ["config", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "To-do item pattern: (bad" not in result.stdout
        assert r"To-do item pattern: (^|\s)\.\.\." in result.stdout


class TestStatusCommand:
    """Tests for the status command."""

    def test_disabled(self, vault: Path, settings_file: Path) -> None:
        result = runner.invoke(app, ["status", "inbox.md", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "disabled" in result.stdout

    def test_counts_items(self, vault: Path, settings_file: Path) -> None:
        runner.invoke(app, ["config", "--status-bar", *_args(vault, settings_file)])

        result = runner.invoke(app, ["status", "inbox.md", *_args(vault, settings_file)])

        assert result.exit_code == 0
        assert "2 to-do items" in result.stdout

    def test_unreadable_document(self, vault: Path, settings_file: Path) -> None:
        runner.invoke(app, ["config", "--status-bar", *_args(vault, settings_file)])

        result = runner.invoke(app, ["status", "missing.md", *_args(vault, settings_file)])

        assert result.exit_code == 1
        assert "Cannot read missing.md" in result.stdout
