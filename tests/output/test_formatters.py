"""Tests for the format_result dispatcher and OutputSettings."""

import json

from licwatch.output.formatters import OutputSettings, format_result
from licwatch.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="ERR", message=msg),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("notify", sent=True), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "notify"
        assert data["data"]["sent"] is True

    def test_json_mode_error(self) -> None:
        output = format_result(_err("notify", "Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["code"] == "ERR"
        assert data["error"]["message"] == "Bad"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True


class TestFormatResultQuiet:
    def test_ok(self) -> None:
        assert format_result(_ok("init"), settings=OutputSettings(quiet=True)) == "OK: init"

    def test_error(self) -> None:
        output = format_result(_err("check", "broken"), settings=OutputSettings(quiet=True))
        assert output == "ERROR: check: broken"


class TestFormatResultRich:
    def test_default_settings(self) -> None:
        output = format_result(_ok("something", answer=42))
        assert "OK" in output
        assert "answer: 42" in output
