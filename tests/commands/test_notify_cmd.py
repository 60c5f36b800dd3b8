"""Tests for the notify command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from licwatch.cli import cli

URL = "https://www.example.com"


@pytest.mark.usefixtures("_isolated_root")
class TestNotifyCommand:
    def test_url_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["notify"])
        assert result.exit_code == 2

    def test_outside_window(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "notify", "--url", URL])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["within_window"] is False
        assert data["sent"] is False
        assert data["days_to_warn"] == 30

    def test_inside_window_without_transport_warns(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        cli_runner.invoke(cli, ["settings", "set", "DefaultNumberOfDaysToWarn", "100000"])

        result = cli_runner.invoke(cli, ["notify", "--url", URL])

        assert result.exit_code == 0
        assert "within_window: True" in result.stdout
        assert "WARNING: No mail transport delivered the message" in result.stderr

    def test_uninitialized_store_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "notify", "--url", URL])
        assert result.exit_code == 1
        assert result.stderr.startswith("ERROR: notify:")
