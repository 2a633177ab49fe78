"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from clipfinder.cli import _format_ranges, _setup_logging, app
from clipfinder.config import FUZZY_ENV, HISTORY_ENV
from clipfinder.models import MatchRange


runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(HISTORY_ENV, raising=False)
    monkeypatch.delenv(FUZZY_ENV, raising=False)


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "content": "hello world", "timestamp": "2026-01-01T12:00:00Z"},
                {"id": 2, "content": "help layout", "timestamp": "2026-01-01T12:05:00Z"},
                {
                    "id": 3,
                    "content": "some text",
                    "timestamp": "2026-01-01T11:00:00Z",
                    "source_app": "Safari",
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("clipfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("clipfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestFormatRanges:
    """Tests for _format_ranges helper."""

    def test_format(self) -> None:
        assert _format_ranges([MatchRange(0, 1), MatchRange(4, 2)]) == "0+1, 4+2"

    def test_empty(self) -> None:
        assert _format_ranges([]) == "-"


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_literal(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "hello", "--history", str(history_file)])

        assert result.exit_code == 0
        assert "hello world" in result.stdout
        assert "subsequence" not in result.stdout

    def test_search_fuzzy_flag(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "hello", "--history", str(history_file), "--fuzzy"])

        assert result.exit_code == 0
        assert "subsequence" in result.stdout
        assert "help layout" in result.stdout

    def test_search_fuzzy_from_env(self, history_file: Path) -> None:
        result = runner.invoke(
            app,
            ["search", "safari", "--history", str(history_file)],
            env={FUZZY_ENV: "1"},
        )

        assert result.exit_code == 0
        assert "source_app" in result.stdout

    def test_no_fuzzy_overrides_env(self, history_file: Path) -> None:
        result = runner.invoke(
            app,
            ["search", "safari", "--history", str(history_file), "--no-fuzzy"],
            env={FUZZY_ENV: "1"},
        )

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_no_matches(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "zzz", "--history", str(history_file)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_empty_query_lists_all(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "", "--history", str(history_file)])

        assert result.exit_code == 0
        assert "hello world" in result.stdout
        assert "help layout" in result.stdout
        assert "some text" in result.stdout

    def test_search_limit(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "", "--history", str(history_file), "--limit", "1"])

        assert result.exit_code == 0
        assert "2 more results not shown" in result.stdout

    def test_search_rejects_negative_limit(self, history_file: Path) -> None:
        result = runner.invoke(app, ["search", "", "--history", str(history_file), "--limit", "-1"])

        assert result.exit_code != 0
        assert "hello world" not in result.stdout

    def test_search_missing_history(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["search", "hello", "--history", str(tmp_path / "nope.json")])

        assert result.exit_code != 0

    def test_search_invalid_history(self, tmp_path: Path) -> None:
        path = tmp_path / "history.json"
        path.write_text("{broken", encoding="utf-8")

        result = runner.invoke(app, ["search", "hello", "--history", str(path)])

        assert result.exit_code != 0


class TestMatchCommand:
    """Tests for the match command."""

    def test_match_prefix(self) -> None:
        result = runner.invoke(app, ["match", "copy", "copy manager app"])

        assert result.exit_code == 0
        assert "prefix" in result.stdout
        assert "contiguous" in result.stdout
        assert "0+4" in result.stdout

    def test_match_acronym_with_fuzzy(self) -> None:
        result = runner.invoke(app, ["match", "cm", "CopyManager", "--fuzzy"])

        assert result.exit_code == 0
        assert "subsequence" in result.stdout
        assert "0+1, 4+1" in result.stdout

    def test_match_acronym_without_fuzzy(self) -> None:
        result = runner.invoke(app, ["match", "cm", "CopyManager"])

        assert result.exit_code == 1
        assert "No match" in result.stdout
