"""Command: send the license expiration mail when it is due."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licwatch.commands._base import LicwatchCommand

if TYPE_CHECKING:
    from licwatch.commands._context import AppContext


@click.command(
    cls=LicwatchCommand,
    examples="""\
  licwatch notify --url https://www.example.com
  licwatch --json notify --url https://www.example.com""",
)
@click.option("--url", required=True, help="Site URL substituted for [url].")
@click.pass_obj
def notify(app: AppContext, url: str) -> None:
    """Mail the expiration notice if the license is inside its warning window."""
    from licwatch.services.notify import NotificationService

    app.emit(NotificationService(app.host).run(url))
