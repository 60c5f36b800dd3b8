"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, licwatch.toml only contains overrides.
A fresh install needs only [license] expiration.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

# --- licwatch.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: str = ".licwatch/content.db"
    default_database: str = "master"
    databases: list[str] = Field(default_factory=lambda: ["master", "web"])
    site_url: str = "http://localhost"


class LicenseConfig(BaseModel):
    """[license] section."""

    model_config = {"frozen": True}

    expiration: date | None = None


class NotifyConfig(BaseModel):
    """[notify] section."""

    model_config = {"frozen": True}

    default_days_to_warn: int = 7
    warning_icon: str = "Applications/16x16/delete.png"
    settings_database: str = "master"


class MailConfig(BaseModel):
    """[mail] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    host: str = "localhost"
    port: int = 25
    use_tls: bool = False
    username: str | None = None
    password: str | None = None
    timeout: float = 10.0


class LicwatchConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    license: LicenseConfig = Field(default_factory=LicenseConfig)
    notify: NotifyConfig = Field(default_factory=NotifyConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
