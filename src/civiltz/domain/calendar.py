"""Proleptic Gregorian calendar math.

All operations are pure and total except the validators and parsers,
which are the only entry points for user-supplied fields and report
failure as a :class:`~civiltz.domain.result.Result`.

Day counting uses the civil-from-days algorithm over 400-year eras,
anchored at the Unix epoch (1970-01-01 is epoch day 0, a Thursday).
No calendar reform gap is modeled: 1582-10-04 is followed by 1582-10-05.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, model_validator

from civiltz.domain.result import InvalidDate, Result, failure, success
from civiltz.domain.types import (
    DAYS_IN_MONTH,
    MAX_YEAR,
    MIN_YEAR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    DayOfWeek,
)

_DAYS_PER_ERA = 146097
_EPOCH_SHIFT = 719468  # days from 0000-03-01 to 1970-01-01

_DATE_RE = re.compile(r"^([+-]?\d{4,})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


class CivilDate(BaseModel):
    """A proleptic Gregorian calendar date."""

    model_config = {"frozen": True}

    year: int
    month: int
    day: int

    @model_validator(mode="after")
    def _check_fields(self) -> CivilDate:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")
        limit = days_in_month(self.year, self.month)
        if not 1 <= self.day <= limit:
            raise ValueError(f"day must be between 1 and {limit}, got {self.day}")
        return self

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


class CivilTime(BaseModel):
    """A wall-clock time of day with second precision."""

    model_config = {"frozen": True}

    hour: int = 0
    minute: int = 0
    second: int = 0

    @model_validator(mode="after")
    def _check_fields(self) -> CivilTime:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59 and 0 <= self.second <= 59):
            raise ValueError(f"time out of range: {self.hour}:{self.minute}:{self.second}")
        return self

    def seconds_of_day(self) -> int:
        return self.hour * SECONDS_PER_HOUR + self.minute * SECONDS_PER_MINUTE + self.second

    def isoformat(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def __str__(self) -> str:
        return self.isoformat()


MIDNIGHT = CivilTime()


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


def validate(year: int, month: int, day: int) -> Result[CivilDate]:
    """Build a :class:`CivilDate` from user-supplied fields."""
    detail = {"year": year, "month": month, "day": day}
    if not MIN_YEAR <= year <= MAX_YEAR:
        msg = f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}"
        return failure(InvalidDate(message=msg, detail=detail))
    if not 1 <= month <= 12:
        msg = f"month must be between 1 and 12, got {month}"
        return failure(InvalidDate(message=msg, detail=detail))
    limit = days_in_month(year, month)
    if not 1 <= day <= limit:
        msg = f"day must be between 1 and {limit}, got {day}"
        return failure(InvalidDate(message=msg, detail=detail))
    return success(CivilDate(year=year, month=month, day=day))


def validate_time(hour: int, minute: int, second: int = 0) -> Result[CivilTime]:
    """Build a :class:`CivilTime` from user-supplied fields."""
    detail = {"hour": hour, "minute": minute, "second": second}
    for name, value, upper in (("hour", hour, 23), ("minute", minute, 59), ("second", second, 59)):
        if not 0 <= value <= upper:
            msg = f"{name} must be between 0 and {upper}, got {value}"
            return failure(InvalidDate(message=msg, detail=detail))
    return success(CivilTime(hour=hour, minute=minute, second=second))


def parse_date(text: str) -> Result[CivilDate]:
    """Parse ``YYYY-MM-DD`` (optionally signed year)."""
    match = _DATE_RE.match(text.strip())
    if match is None:
        msg = f"Expected YYYY-MM-DD, got {text!r}"
        return failure(InvalidDate(message=msg, detail={"text": text}))
    year, month, day = (int(group) for group in match.groups())
    return validate(year, month, day)


def parse_time(text: str) -> Result[CivilTime]:
    """Parse ``HH:MM`` or ``HH:MM:SS``."""
    match = _TIME_RE.match(text.strip())
    if match is None:
        msg = f"Expected HH:MM[:SS], got {text!r}"
        return failure(InvalidDate(message=msg, detail={"text": text}))
    hour, minute, second = match.groups()
    return validate_time(int(hour), int(minute), int(second or 0))


def to_epoch_day(date: CivilDate) -> int:
    """Days since 1970-01-01 (negative before)."""
    year = date.year - (1 if date.month <= 2 else 0)
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = date.month - 3 if date.month > 2 else date.month + 9
    day_of_year = (153 * shifted_month + 2) // 5 + date.day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT


def from_epoch_day(days: int) -> CivilDate:
    """Inverse of :func:`to_epoch_day`."""
    days += _EPOCH_SHIFT
    era = days // _DAYS_PER_ERA
    day_of_era = days - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return CivilDate(year=year, month=month, day=day)


def add_days(date: CivilDate, n: int) -> CivilDate:
    if n == 0:
        return date
    return from_epoch_day(to_epoch_day(date) + n)


def add_months(date: CivilDate, n: int) -> CivilDate:
    """Shift by whole months, clamping the day to the target month's length."""
    if n == 0:
        return date
    index = date.year * 12 + (date.month - 1) + n
    year, month_index = divmod(index, 12)
    month = month_index + 1
    day = min(date.day, days_in_month(year, month))
    return CivilDate(year=year, month=month, day=day)


def day_of_week(date: CivilDate) -> DayOfWeek:
    # Epoch day 0 is a Thursday (ISO 4)
    return DayOfWeek((to_epoch_day(date) + 3) % 7 + 1)


def to_epoch_seconds(date: CivilDate, time: CivilTime = MIDNIGHT) -> int:
    """Seconds since 1970-01-01T00:00:00 for the fields read as UTC."""
    return to_epoch_day(date) * SECONDS_PER_DAY + time.seconds_of_day()


def from_epoch_seconds(seconds: int) -> tuple[CivilDate, CivilTime]:
    days, remainder = divmod(seconds, SECONDS_PER_DAY)
    hour, remainder = divmod(remainder, SECONDS_PER_HOUR)
    minute, second = divmod(remainder, SECONDS_PER_MINUTE)
    return from_epoch_day(days), CivilTime(hour=hour, minute=minute, second=second)
