"""Command group: plain calendar dates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from civiltz.commands._base import CivilGroup

if TYPE_CHECKING:
    from civiltz.commands._context import AppContext


@click.group(
    cls=CivilGroup,
    examples="""\
  civiltz date show 2014-01-01
  civiltz date add 1582-10-04 --days 1
  civiltz date add 2024-01-31 --months 1 --pattern yyyy.MM.dd""",
)
def date() -> None:
    """Inspect and shift proleptic Gregorian dates."""


@date.command(
    examples="""\
  civiltz date show 1999-12-31
  civiltz --json date show 2000-02-29""",
)
@click.argument("value")
@click.option("--pattern", "-p", default=None, help="Render pattern (default from config).")
@click.pass_obj
def show(app: AppContext, value: str, pattern: str | None) -> None:
    """Show the fields and weekday of a YYYY-MM-DD date."""
    from civiltz.services.calendar import CalendarService

    svc = CalendarService(app.table)
    app.emit(svc.show(value, pattern=pattern or app.settings.format.date_pattern))


@date.command(
    examples="""\
  civiltz date add 1582-10-04 --days 1
  civiltz date add 2020-03-01 --days -1
  civiltz date add 2024-01-31 --months 1""",
)
@click.argument("value")
@click.option("--days", "-d", type=int, default=0, help="Days to add (may be negative).")
@click.option("--months", "-m", type=int, default=0, help="Months to add before the days.")
@click.option("--pattern", "-p", default=None, help="Render pattern (default from config).")
@click.pass_obj
def add(app: AppContext, value: str, days: int, months: int, pattern: str | None) -> None:
    """Add months and days to a YYYY-MM-DD date."""
    from civiltz.services.calendar import CalendarService

    svc = CalendarService(app.table)
    app.emit(
        svc.add(
            value,
            days=days,
            months=months,
            pattern=pattern or app.settings.format.date_pattern,
        )
    )
