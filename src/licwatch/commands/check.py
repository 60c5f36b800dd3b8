"""Command: structural check of the module's items."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licwatch.commands._base import LicwatchCommand

if TYPE_CHECKING:
    from licwatch.commands._context import AppContext


@click.command(
    cls=LicwatchCommand,
    examples="""\
  licwatch check
  licwatch check --errors-only
  licwatch --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool) -> None:
    """Check fixed paths and the module structure in every database."""
    from licwatch.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    app.emit(CheckService(app.host).check(min_severity=threshold))
