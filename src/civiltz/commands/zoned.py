"""Command group: local date-times in a zone."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from civiltz.commands._base import CivilGroup, UnitChoice
from civiltz.domain.types import TimeUnit

if TYPE_CHECKING:
    from civiltz.commands._context import AppContext


@click.group(
    cls=CivilGroup,
    examples="""\
  civiltz zoned show 1988-05-08T01:00 --zone Asia/Seoul
  civiltz zoned plus 1988-05-08T01:00 1 hour --zone Asia/Seoul""",
)
def zoned() -> None:
    """Resolve and shift date-times against zone rules."""


@zoned.command(
    examples="""\
  civiltz zoned show 1988-05-08T02:30 --zone Asia/Seoul
  civiltz zoned show "2012-06-30 23:59:59" --pattern 'yyyy.MM.dd HH:mm:ss'""",
)
@click.argument("value")
@click.option("--zone", "-z", "zone_id", default=None, help="Zone id (default from config).")
@click.option("--pattern", "-p", default=None, help="Render pattern (default from config).")
@click.pass_obj
def show(app: AppContext, value: str, zone_id: str | None, pattern: str | None) -> None:
    """Resolve a local YYYY-MM-DDTHH:MM[:SS] in a zone."""
    from civiltz.services.clock import ClockService

    svc = ClockService(app.table)
    app.emit(
        svc.show(
            value,
            app.zone(zone_id),
            pattern=pattern or app.settings.format.datetime_pattern,
        )
    )


@zoned.command(
    context_settings={"ignore_unknown_options": True},
    examples="""\
  civiltz zoned plus 1961-08-09T23:59:59 1 minute --zone Asia/Seoul
  civiltz zoned plus 2012-06-30T23:59:59 2 seconds --zone UTC
  civiltz zoned plus 1988-05-07T02:00 1 day --zone Asia/Seoul
  civiltz zoned plus 1988-05-08T03:00 -1 hour --zone Asia/Seoul""",
)
@click.argument("value")
@click.argument("amount", type=int)
@click.argument("unit", type=UnitChoice([u.value for u in TimeUnit]))
@click.option("--zone", "-z", "zone_id", default=None, help="Zone id (default from config).")
@click.option("--pattern", "-p", default=None, help="Render pattern (default from config).")
@click.pass_obj
def plus(
    app: AppContext,
    value: str,
    amount: int,
    unit: str,
    zone_id: str | None,
    pattern: str | None,
) -> None:
    """Add AMOUNT UNITs to a local date-time in a zone.

    Days, weeks, months and years keep the local time; hours, minutes and
    seconds move the instant. AMOUNT may be negative.
    """
    from civiltz.services.clock import ClockService

    svc = ClockService(app.table)
    app.emit(
        svc.plus(
            value,
            app.zone(zone_id),
            amount,
            TimeUnit(unit.lower()),
            pattern=pattern or app.settings.format.datetime_pattern,
        )
    )
