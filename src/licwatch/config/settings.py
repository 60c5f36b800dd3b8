"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LICWATCH_*`` prefix
  3. TOML file    — ``licwatch.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`licwatch.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from licwatch.config.discovery import find_config
from licwatch.config.models import LicenseConfig, MailConfig, NotifyConfig, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``licwatch.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LicwatchSettings(BaseSettings):
    """Unified settings for the entire licwatch CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored in
    ``click.Context.obj`` at the CLI root level.

    Attributes:
        root: Resolved project directory (parent of ``licwatch.toml``,
            or CWD if no config found). The store path is relative to it.
        config_path: Explicit ``--config`` override, or None for discovery.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LICWATCH_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from the config location, not read from TOML) ---
    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    database: str | None = None

    # --- TOML sections (reuse frozen models) ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    license: LicenseConfig = Field(default_factory=LicenseConfig)
    notify: NotifyConfig = Field(default_factory=NotifyConfig)
    mail: MailConfig = Field(default_factory=MailConfig)

    @property
    def store_path(self) -> Path:
        """Absolute path of the SQLite content store."""
        path = Path(self.store.path)
        return path if path.is_absolute() else self.root / path

    @property
    def database_name(self) -> str:
        """The database commands read from (``--database`` or the configured default)."""
        return self.database or self.store.default_database

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> LicwatchSettings:
        """Build settings for one CLI invocation.

        The config file is *config_path* when given, otherwise the nearest
        ``licwatch.toml`` above *root* (or the working directory). Without
        an explicit *root*, the directory holding the config file is the
        project root. *cli_flags* override every other source.

        Raises:
            click.ClickException: If *config_path* names a missing file.
        """
        toml_path = _locate_config(config_path, root)
        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None


def _locate_config(config_path: str | None, start: Path | None) -> Path | None:
    if not config_path:
        return find_config(start)
    explicit = Path(config_path)
    if not explicit.is_file():
        import click

        msg = f"Config file not found: {explicit}"
        raise click.ClickException(msg)
    return explicit
