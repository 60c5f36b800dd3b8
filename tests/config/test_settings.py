"""Tests for LicwatchSettings — unified settings with TOML source."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click
import pytest

from licwatch.config.settings import LicwatchSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = LicwatchSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.store.databases == ["master", "web"]
        assert settings.license.expiration is None
        assert settings.notify.default_days_to_warn == 7
        assert settings.notify.warning_icon == "Applications/16x16/delete.png"
        assert settings.mail.port == 25

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LicwatchSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_store_path_is_relative_to_root(self, tmp_path: Path) -> None:
        settings = LicwatchSettings.from_cli(root=tmp_path)
        assert settings.store_path == tmp_path / ".licwatch" / "content.db"

    def test_database_name_defaults_to_store_default(self, tmp_path: Path) -> None:
        assert LicwatchSettings.from_cli(root=tmp_path).database_name == "master"
        assert LicwatchSettings.from_cli(root=tmp_path, database="web").database_name == "web"


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "licwatch.toml").write_text(
            '[license]\nexpiration = "2027-03-01"\n\n[notify]\ndefault_days_to_warn = 14\n'
        )
        settings = LicwatchSettings.from_cli(root=tmp_path)
        assert settings.license.expiration == date(2027, 3, 1)
        assert settings.notify.default_days_to_warn == 14
        assert settings.notify.settings_database == "master"  # default preserved

    def test_root_follows_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "licwatch.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = LicwatchSettings.from_cli()
        assert settings.root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[store]\npath = "data/items.db"\n')
        settings = LicwatchSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.config_path == custom
        assert settings.store_path == tmp_path / "data" / "items.db"

    def test_missing_explicit_config_is_a_click_error(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            LicwatchSettings.from_cli(config_path=str(tmp_path / "nope.toml"), root=tmp_path)

    def test_invalid_toml_is_a_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "licwatch.toml").write_text("[license\nexpiration = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LicwatchSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "licwatch.toml").write_text("[notify]\ndefault_days_to_warn = 14\n")
        monkeypatch.setenv("LICWATCH_NOTIFY__DEFAULT_DAYS_TO_WARN", "21")
        settings = LicwatchSettings.from_cli(root=tmp_path)
        assert settings.notify.default_days_to_warn == 21

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = LicwatchSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
