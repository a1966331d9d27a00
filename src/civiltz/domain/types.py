"""Calendar enums and shared constants."""

from __future__ import annotations

from enum import IntEnum, StrEnum

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

# Supported proleptic year range
MIN_YEAR = -9999
MAX_YEAR = 9999

# Days in each month (non-leap year), 1-indexed
DAYS_IN_MONTH: tuple[int, ...] = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class DayOfWeek(IntEnum):
    """ISO day of week, Monday is 1."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class TimeUnit(StrEnum):
    """Units accepted by zoned arithmetic."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def is_calendar_based(self) -> bool:
        """True for units applied to the civil date rather than the instant."""
        return self in _CALENDAR_UNITS

    @property
    def seconds(self) -> int:
        """Length in seconds of an instant-based unit."""
        return _UNIT_SECONDS[self]


_CALENDAR_UNITS = frozenset({TimeUnit.DAYS, TimeUnit.WEEKS, TimeUnit.MONTHS, TimeUnit.YEARS})

_UNIT_SECONDS: dict[TimeUnit, int] = {
    TimeUnit.SECONDS: 1,
    TimeUnit.MINUTES: SECONDS_PER_MINUTE,
    TimeUnit.HOURS: SECONDS_PER_HOUR,
}
