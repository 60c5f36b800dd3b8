"""Command: show the content editor license warning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licwatch.commands._base import LicwatchCommand

if TYPE_CHECKING:
    from licwatch.commands._context import AppContext


@click.command(
    cls=LicwatchCommand,
    examples="""\
  licwatch warnings
  licwatch warnings --item /sitecore/content/Home
  licwatch warnings --url https://www.example.com""",
)
@click.option("--item", "item_path", default=None, help="Path of the item being edited.")
@click.option("--url", default=None, help="Server URL for [url] (default: [store] site_url).")
@click.pass_obj
def warnings(app: AppContext, item_path: str | None, url: str | None) -> None:
    """Show the warnings the content editor would display."""
    from licwatch.services.contracts import ContentEditorWarnings
    from licwatch.services.warnings import EditorWarningService

    args = ContentEditorWarnings(item_path=item_path)
    app.emit(EditorWarningService(app.host).process(args, url=url))
