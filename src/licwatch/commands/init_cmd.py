"""Command: store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licwatch.commands._base import LicwatchCommand

if TYPE_CHECKING:
    from licwatch.commands._context import AppContext

_INIT_EXAMPLES = """\
  licwatch init
  licwatch -v init
  licwatch --json init"""


@click.command("init", cls=LicwatchCommand, examples=_INIT_EXAMPLES)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the content store and seed the module's items."""
    from licwatch.services.init import InitService

    app.emit(InitService(app.host).init_store())
