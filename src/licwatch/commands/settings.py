"""Command group: show and edit the module settings item."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licwatch.commands._base import LicwatchGroup

if TYPE_CHECKING:
    from licwatch.commands._context import AppContext

_SETTINGS_EXAMPLES = """\
  licwatch settings show
  licwatch settings set always_warn true
  licwatch settings set DefaultNumberOfDaysToWarn 30
  licwatch --database web settings show"""


@click.group(cls=LicwatchGroup, examples=_SETTINGS_EXAMPLES)
def settings() -> None:
    """Show and edit the license module settings."""


@settings.command(
    examples="""\
  licwatch settings show
  licwatch --json settings show"""
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show every settings property."""
    from licwatch.services.settings import SettingsService

    app.emit(SettingsService(app.host).show())


@settings.command(
    "set",
    examples="""\
  licwatch settings set always_warn true
  licwatch settings set mail-to ops@example.com
  licwatch settings set MailSubject 'License expires on [date]'""",
)
@click.argument("prop")
@click.argument("value")
@click.pass_obj
def set_cmd(app: AppContext, prop: str, value: str) -> None:
    """Set settings property PROP to VALUE."""
    from licwatch.services.settings import SettingsService

    app.emit(SettingsService(app.host).set(prop, value))
