"""Tests for the show CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdstudio.cli import cli
from tests.conftest import POST_HELLO


@pytest.mark.usefixtures("_isolated_studio")
class TestShowCommand:
    def test_panel(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "posts", "hello-world"])
        assert result.exit_code == 0
        assert "hello-world" in result.output
        assert "Hello World" in result.output
        assert "Hello from the first post." in result.output
        assert "read time: 1 minute read" in result.output

    def test_raw(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "posts", "hello-world", "--raw"])
        assert result.exit_code == 0
        assert result.output == POST_HELLO

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "show", "posts", "second"])
        data = json.loads(result.output)
        assert data["data"]["metadata"]["draft"] is True
        assert data["data"]["content"] == "Some more words here.\n"

    def test_missing_entry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "posts", "nope"])
        assert result.exit_code == 1
        assert "Entry with slug 'nope' not found" in result.output

    def test_verbose_error_detail(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "show", "posts", "nope"])
        assert "slug: nope" in result.output

    def test_undeclared_keys_kept(self, cli_runner: CliRunner, content_root: Path) -> None:
        (content_root / "content" / "posts" / "dated.md").write_text(
            "---\ntitle: Dated\npublished: 2024-01-15\n---\n\nBody\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["--json", "show", "posts", "dated"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["metadata"] == {
            "title": "Dated",
            "published": "2024-01-15",
        }
