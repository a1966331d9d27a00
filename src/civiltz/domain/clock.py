"""Zoned date-times and offset-aware arithmetic.

Local fields are resolved to an absolute instant against the zone's
rules. Skipped local times (spring-forward gaps) are pushed forward by
the length of the gap; repeated local times (fall-back overlaps) take
the offset that was in effect before the transition.

Arithmetic in days, weeks, months or years moves the civil date and
keeps the local time. Arithmetic in hours, minutes or seconds moves the
instant, so a one-hour step across a gap shows a two-hour jump on the
wall clock.
"""

from __future__ import annotations

from pydantic import BaseModel

from civiltz.domain import calendar
from civiltz.domain.calendar import CivilDate, CivilTime
from civiltz.domain.result import Result, failure, success
from civiltz.domain.types import TimeUnit
from civiltz.domain.zones import ZoneOffset, ZoneRules, ZoneRuleTable


class ZonedInstant(BaseModel):
    """A local date-time bound to a zone, with its resolved offset.

    Build instances through :class:`ZonedClock`, which guarantees the offset
    and DST flag match the zone's rules at :attr:`epoch_seconds`. Direct
    construction is for internal use; :meth:`ZonedClock.plus` rejects an
    instance whose offset disagrees with its zone.
    """

    model_config = {"frozen": True}

    date: CivilDate
    time: CivilTime
    zone_id: str
    offset_seconds: int
    is_dst: bool

    @property
    def offset(self) -> ZoneOffset:
        return ZoneOffset(offset_seconds=self.offset_seconds, is_dst=self.is_dst)

    @property
    def epoch_seconds(self) -> int:
        return calendar.to_epoch_seconds(self.date, self.time) - self.offset_seconds

    def isoformat(self) -> str:
        """ISO-8601 local date-time with offset and bracketed zone id."""
        return (
            f"{self.date.isoformat()}T{self.time.isoformat()}"
            f"{self.offset.isoformat()}[{self.zone_id}]"
        )

    def __str__(self) -> str:
        return self.isoformat()


def _resolve_local(rules: ZoneRules, date: CivilDate, time: CivilTime) -> tuple[int, ZoneOffset]:
    """Map local fields to ``(epoch_seconds, offset)`` under *rules*."""
    local = calendar.to_epoch_seconds(date, time)
    provisional = rules.offset_at(local)
    instant = local - provisional.offset_seconds
    resolved = rules.offset_at(instant)

    if resolved.offset_seconds != provisional.offset_seconds:
        retry = local - resolved.offset_seconds
        retried = rules.offset_at(retry)
        if retried.offset_seconds == resolved.offset_seconds:
            instant, resolved = retry, retried
        else:
            # Gap: no offset is consistent, use the pre-transition reading
            instant = max(instant, retry)
            resolved = rules.offset_at(instant)
        return instant, resolved

    # Overlap: prefer the earlier offset when the local time also exists there
    governing = rules.transition_governing(instant)
    if governing is not None:
        earlier = rules.offset_before(instant)
        if earlier.offset_seconds != resolved.offset_seconds:
            candidate = local - earlier.offset_seconds
            if (
                candidate < governing.effective_instant
                and rules.offset_at(candidate).offset_seconds == earlier.offset_seconds
            ):
                return candidate, rules.offset_at(candidate)
    return instant, resolved


def _at_instant(rules: ZoneRules, epoch_seconds: int) -> ZonedInstant:
    offset = rules.offset_at(epoch_seconds)
    date, time = calendar.from_epoch_seconds(epoch_seconds + offset.offset_seconds)
    return ZonedInstant(
        date=date,
        time=time,
        zone_id=rules.zone_id,
        offset_seconds=offset.offset_seconds,
        is_dst=offset.is_dst,
    )


class ZonedClock:
    """Constructs and shifts :class:`ZonedInstant` values against a zone table."""

    def __init__(self, table: ZoneRuleTable) -> None:
        self._table = table

    @property
    def table(self) -> ZoneRuleTable:
        return self._table

    def _rules(self, zone_id: str) -> ZoneRules:
        result = self._table.lookup(zone_id)
        if result.value is None:
            msg = f"Zone {zone_id!r} is not registered in this clock's table"
            raise LookupError(msg)
        return result.value

    def _resolve(self, rules: ZoneRules, date: CivilDate, time: CivilTime) -> ZonedInstant:
        epoch_seconds, _ = _resolve_local(rules, date, time)
        return _at_instant(rules, epoch_seconds)

    def of(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        zone_id: str,
    ) -> Result[ZonedInstant]:
        date_result = calendar.validate(year, month, day)
        if date_result.value is None:
            return failure(date_result.error)
        time_result = calendar.validate_time(hour, minute, second)
        if time_result.value is None:
            return failure(time_result.error)
        return self.of_fields(date_result.value, time_result.value, zone_id)

    def of_fields(self, date: CivilDate, time: CivilTime, zone_id: str) -> Result[ZonedInstant]:
        """Like :meth:`of` for already validated civil values."""
        zone = self._table.lookup(zone_id)
        if zone.value is None:
            return failure(zone.error)
        return success(self._resolve(zone.value, date, time))

    def parse(self, text: str, zone_id: str) -> Result[ZonedInstant]:
        """Parse ``YYYY-MM-DDTHH:MM[:SS]`` (``T`` or a space) as local time in *zone_id*."""
        date_text, sep, time_text = text.strip().replace(" ", "T", 1).partition("T")
        date_result = calendar.parse_date(date_text)
        if date_result.value is None:
            return failure(date_result.error)
        if not sep:
            return self.of_fields(date_result.value, calendar.MIDNIGHT, zone_id)
        time_result = calendar.parse_time(time_text)
        if time_result.value is None:
            return failure(time_result.error)
        return self.of_fields(date_result.value, time_result.value, zone_id)

    def from_epoch_seconds(self, epoch_seconds: int, zone_id: str) -> Result[ZonedInstant]:
        zone = self._table.lookup(zone_id)
        if zone.value is None:
            return failure(zone.error)
        return success(_at_instant(zone.value, epoch_seconds))

    def with_zone(self, instant: ZonedInstant, zone_id: str) -> Result[ZonedInstant]:
        """The same instant seen from another zone."""
        return self.from_epoch_seconds(instant.epoch_seconds, zone_id)

    def plus(self, instant: ZonedInstant, amount: int, unit: TimeUnit) -> ZonedInstant:
        """Add *amount* of *unit* to *instant*, resolving the result in its zone.

        Hours, minutes and seconds move the instant; days and larger units move
        the local fields, so a result landing in a gap shifts forward and one in
        an overlap takes the earlier offset.

        Raises ``LookupError`` if the instant's zone is not in this clock's table
        and ``ValueError`` if its offset does not match the zone's rules. Both
        mean the instant did not come from this clock.
        """
        rules = self._rules(instant.zone_id)
        expected = rules.offset_at(instant.epoch_seconds)
        if expected != instant.offset:
            msg = (
                f"Offset {instant.offset.isoformat()} of {instant} does not match "
                f"zone {instant.zone_id!r} ({expected.isoformat()})"
            )
            raise ValueError(msg)
        if not unit.is_calendar_based:
            return _at_instant(rules, instant.epoch_seconds + amount * unit.seconds)

        if unit is TimeUnit.DAYS:
            date = calendar.add_days(instant.date, amount)
        elif unit is TimeUnit.WEEKS:
            date = calendar.add_days(instant.date, amount * 7)
        elif unit is TimeUnit.MONTHS:
            date = calendar.add_months(instant.date, amount)
        else:
            date = calendar.add_months(instant.date, amount * 12)
        return self._resolve(rules, date, instant.time)

    def minus(self, instant: ZonedInstant, amount: int, unit: TimeUnit) -> ZonedInstant:
        return self.plus(instant, -amount, unit)

