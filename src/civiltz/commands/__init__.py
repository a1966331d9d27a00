"""Subcommand modules for civiltz.

Provides register_commands() which uses deferred imports to keep
``civiltz --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from civiltz.commands.date import date
    from civiltz.commands.zoned import zoned
    from civiltz.commands.zones import zones

    cli.add_command(date)
    cli.add_command(zoned)
    cli.add_command(zones)
