"""Command group: zone registry inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from civiltz.commands._base import CivilGroup

if TYPE_CHECKING:
    from civiltz.commands._context import AppContext


@click.group(
    cls=CivilGroup,
    examples="""\
  civiltz zones list
  civiltz zones show Asia/Seoul --at 1988-05-08T03:00""",
)
def zones() -> None:
    """Inspect registered zone rules."""


@zones.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered zone ids."""
    from civiltz.services.zones import ZoneService

    app.emit(ZoneService(app.table).list_zones())


@zones.command(
    examples="""\
  civiltz zones show UTC
  civiltz zones show Asia/Seoul --at 1961-08-10T00:30""",
)
@click.argument("zone_id")
@click.option("--at", "at", default=None, help="Also resolve this local date-time.")
@click.pass_obj
def show(app: AppContext, zone_id: str, at: str | None) -> None:
    """Show a zone's transitions."""
    from civiltz.services.zones import ZoneService

    app.emit(ZoneService(app.table).show(zone_id, at=at))
