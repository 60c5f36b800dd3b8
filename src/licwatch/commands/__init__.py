"""Subcommand modules for licwatch.

Provides register_commands() which uses deferred imports to keep
``licwatch --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from licwatch.commands.settings import settings

    cli.add_command(settings)

    # --- Standalone commands ---
    from licwatch.commands.check import check
    from licwatch.commands.init_cmd import init_cmd
    from licwatch.commands.notify import notify
    from licwatch.commands.warnings import warnings

    cli.add_command(init_cmd)
    cli.add_command(check)
    cli.add_command(warnings)
    cli.add_command(notify)
