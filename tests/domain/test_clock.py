"""Tests for zoned date-time resolution and arithmetic."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from civiltz.domain.calendar import CivilDate, CivilTime
from civiltz.domain.clock import ZonedClock, ZonedInstant
from civiltz.domain.result import INVALID_DATE, UNKNOWN_ZONE_ID, InvalidDate, UnknownZoneId
from civiltz.domain.types import TimeUnit
from civiltz.domain.zones import ZoneRuleTable

HOUR = 3600
Unwrap = Callable[[Any], Any]


def local(instant: ZonedInstant) -> tuple[int, int, int, int, int, int]:
    return (
        instant.date.year,
        instant.date.month,
        instant.date.day,
        instant.time.hour,
        instant.time.minute,
        instant.time.second,
    )


class TestOf:
    def test_standard_time(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 1, 15, 12, 0, 0, "Test/Summer"))
        assert local(instant) == (2021, 1, 15, 12, 0, 0)
        assert instant.offset_seconds == HOUR
        assert instant.is_dst is False

    def test_summer_time(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        assert instant.offset_seconds == 2 * HOUR
        assert instant.is_dst is True

    def test_epoch_seconds_account_for_offset(
        self, dst_clock: ZonedClock, unwrap: Unwrap, epoch: Callable[..., int]
    ) -> None:
        instant = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        assert instant.epoch_seconds == epoch(2021, 7, 1, 10)

    def test_invalid_month(self, dst_clock: ZonedClock) -> None:
        result = dst_clock.of(1999, 13, 31, 0, 0, 0, "UTC")
        assert not result.ok
        assert isinstance(result.error, InvalidDate)
        assert result.error.code == INVALID_DATE

    def test_invalid_hour(self, dst_clock: ZonedClock) -> None:
        result = dst_clock.of(1999, 12, 31, 24, 0, 0, "UTC")
        assert isinstance(result.error, InvalidDate)

    def test_unknown_zone(self, dst_clock: ZonedClock) -> None:
        result = dst_clock.of(1999, 12, 31, 0, 0, 0, "Seould/Asia")
        assert not result.ok
        assert isinstance(result.error, UnknownZoneId)
        assert result.error.code == UNKNOWN_ZONE_ID

    def test_date_checked_before_zone(self, dst_clock: ZonedClock) -> None:
        result = dst_clock.of(1999, 13, 31, 0, 0, 0, "Seould/Asia")
        assert isinstance(result.error, InvalidDate)


class TestGapResolution:
    def test_local_time_in_gap_pushed_forward(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 3, 28, 2, 30, 0, "Test/Summer"))
        assert local(instant) == (2021, 3, 28, 3, 30, 0)
        assert instant.is_dst is True

    def test_gap_start_becomes_transition_instant(
        self, dst_clock: ZonedClock, unwrap: Unwrap, epoch: Callable[..., int]
    ) -> None:
        instant = unwrap(dst_clock.of(2021, 3, 28, 2, 0, 0, "Test/Summer"))
        assert local(instant) == (2021, 3, 28, 3, 0, 0)
        assert instant.epoch_seconds == epoch(2021, 3, 28, 1)

    def test_just_before_gap(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 3, 28, 1, 59, 59, "Test/Summer"))
        assert local(instant) == (2021, 3, 28, 1, 59, 59)
        assert instant.is_dst is False


class TestOverlapResolution:
    def test_repeated_hour_prefers_earlier_offset(
        self, dst_clock: ZonedClock, unwrap: Unwrap
    ) -> None:
        instant = unwrap(dst_clock.of(2021, 10, 31, 2, 30, 0, "Test/Summer"))
        assert local(instant) == (2021, 10, 31, 2, 30, 0)
        assert instant.offset_seconds == 2 * HOUR
        assert instant.is_dst is True

    def test_second_occurrence_reached_by_instant_arithmetic(
        self, dst_clock: ZonedClock, unwrap: Unwrap
    ) -> None:
        first = unwrap(dst_clock.of(2021, 10, 31, 2, 30, 0, "Test/Summer"))
        second = dst_clock.plus(first, 1, TimeUnit.HOURS)
        assert local(second) == (2021, 10, 31, 2, 30, 0)
        assert second.offset_seconds == HOUR
        assert second.is_dst is False

    def test_before_and_after_overlap(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        before = unwrap(dst_clock.of(2021, 10, 31, 1, 30, 0, "Test/Summer"))
        after = unwrap(dst_clock.of(2021, 10, 31, 3, 30, 0, "Test/Summer"))
        assert before.offset_seconds == 2 * HOUR
        assert after.offset_seconds == HOUR


class TestPlusInstantUnits:
    def test_hour_across_spring_forward(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 3, 28, 1, 30, 0, "Test/Summer"))
        after = dst_clock.plus(start, 1, TimeUnit.HOURS)
        assert local(after) == (2021, 3, 28, 3, 30, 0)
        assert after.epoch_seconds - start.epoch_seconds == HOUR

    def test_seconds_across_midnight(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2012, 6, 30, 23, 59, 59, "UTC"))
        after = dst_clock.plus(start, 2, TimeUnit.SECONDS)
        assert local(after) == (2012, 7, 1, 0, 0, 1)

    def test_minus(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 3, 28, 3, 30, 0, "Test/Summer"))
        before = dst_clock.minus(start, 1, TimeUnit.HOURS)
        assert local(before) == (2021, 3, 28, 1, 30, 0)

    def test_24_hours_is_not_a_day_across_dst(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 3, 27, 12, 0, 0, "Test/Summer"))
        assert local(dst_clock.plus(start, 24, TimeUnit.HOURS)) == (2021, 3, 28, 13, 0, 0)
        assert local(dst_clock.plus(start, 1, TimeUnit.DAYS)) == (2021, 3, 28, 12, 0, 0)

    def test_returns_new_value(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 1, 1, 0, 0, 0, "UTC"))
        dst_clock.plus(start, 5, TimeUnit.MINUTES)
        assert local(start) == (2021, 1, 1, 0, 0, 0)


class TestPlusCalendarUnits:
    def test_day_keeps_local_time_and_reresolves_offset(
        self, dst_clock: ZonedClock, unwrap: Unwrap
    ) -> None:
        start = unwrap(dst_clock.of(2021, 3, 27, 12, 0, 0, "Test/Summer"))
        after = dst_clock.plus(start, 1, TimeUnit.DAYS)
        assert after.is_dst is True
        assert after.epoch_seconds - start.epoch_seconds == 23 * HOUR

    def test_day_landing_in_gap(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 3, 27, 2, 30, 0, "Test/Summer"))
        after = dst_clock.plus(start, 1, TimeUnit.DAYS)
        assert local(after) == (2021, 3, 28, 3, 30, 0)

    def test_weeks(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 12, 28, 9, 0, 0, "UTC"))
        assert local(dst_clock.plus(start, 1, TimeUnit.WEEKS)) == (2022, 1, 4, 9, 0, 0)

    def test_months_clamp(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 1, 31, 10, 0, 0, "Test/Summer"))
        assert local(dst_clock.plus(start, 1, TimeUnit.MONTHS)) == (2021, 2, 28, 10, 0, 0)

    def test_years(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2020, 2, 29, 10, 0, 0, "UTC"))
        assert local(dst_clock.plus(start, 1, TimeUnit.YEARS)) == (2021, 2, 28, 10, 0, 0)

    def test_negative_days(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(dst_clock.of(2021, 3, 1, 0, 0, 0, "UTC"))
        assert local(dst_clock.plus(start, -1, TimeUnit.DAYS)) == (2021, 2, 28, 0, 0, 0)


class TestParse:
    def test_t_separator(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.parse("2021-07-01T12:00", "Test/Summer"))
        assert local(instant) == (2021, 7, 1, 12, 0, 0)

    def test_space_separator_with_seconds(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.parse("2021-07-01 12:00:15", "UTC"))
        assert local(instant) == (2021, 7, 1, 12, 0, 15)

    def test_date_only_is_midnight(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.parse("2021-07-01", "UTC"))
        assert instant.time == CivilTime()

    def test_invalid_text(self, dst_clock: ZonedClock) -> None:
        assert isinstance(dst_clock.parse("2021-07-01T25:00", "UTC").error, InvalidDate)
        assert isinstance(dst_clock.parse("July 1st", "UTC").error, InvalidDate)

    def test_unknown_zone(self, dst_clock: ZonedClock) -> None:
        assert isinstance(dst_clock.parse("2021-07-01T12:00", "Mars/Olympus").error, UnknownZoneId)


class TestZoneConversion:
    def test_with_zone_keeps_instant(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        summer = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        as_utc = unwrap(dst_clock.with_zone(summer, "UTC"))
        assert local(as_utc) == (2021, 7, 1, 10, 0, 0)
        assert as_utc.epoch_seconds == summer.epoch_seconds

    def test_from_epoch_seconds(
        self, dst_clock: ZonedClock, unwrap: Unwrap, epoch: Callable[..., int]
    ) -> None:
        instant = unwrap(dst_clock.from_epoch_seconds(epoch(2021, 3, 28, 1), "Test/Summer"))
        assert local(instant) == (2021, 3, 28, 3, 0, 0)
        assert instant.is_dst is True

    def test_with_unknown_zone(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        summer = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        assert isinstance(dst_clock.with_zone(summer, "Seould/Asia").error, UnknownZoneId)


class TestIsoformat:
    def test_zoned(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        assert instant.isoformat() == "2021-07-01T12:00:00+02:00[Test/Summer]"
        assert str(instant) == instant.isoformat()


class TestForeignInstant:
    def test_plus_on_zone_missing_from_table(self, dst_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(dst_clock.of(2021, 7, 1, 12, 0, 0, "Test/Summer"))
        other = ZonedClock(ZoneRuleTable())
        with pytest.raises(LookupError):
            other.plus(instant, 1, TimeUnit.HOURS)

    def test_plus_rejects_offset_the_zone_never_had(self, dst_clock: ZonedClock) -> None:
        instant = ZonedInstant(
            date=CivilDate(year=2021, month=7, day=1),
            time=CivilTime(hour=12, minute=0, second=0),
            zone_id="Test/Summer",
            offset_seconds=0,
            is_dst=False,
        )
        with pytest.raises(ValueError, match="does not match"):
            dst_clock.plus(instant, 1, TimeUnit.HOURS)

    def test_plus_rejects_wrong_dst_flag(self, dst_clock: ZonedClock) -> None:
        instant = ZonedInstant(
            date=CivilDate(year=2021, month=7, day=1),
            time=CivilTime(hour=12, minute=0, second=0),
            zone_id="Test/Summer",
            offset_seconds=2 * HOUR,
            is_dst=False,
        )
        with pytest.raises(ValueError):
            dst_clock.plus(instant, 1, TimeUnit.DAYS)


class TestSeoulHistory:
    """Bundled Asia/Seoul data against known wall-clock history."""

    def test_spring_forward_1988(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(bundled_clock.of(1988, 5, 8, 1, 0, 0, "Asia/Seoul"))
        assert start.is_dst is False
        after = bundled_clock.plus(start, 1, TimeUnit.HOURS)
        assert local(after) == (1988, 5, 8, 3, 0, 0)
        assert after.is_dst is True
        assert after.offset_seconds == 10 * HOUR

    def test_fall_back_1988(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(bundled_clock.of(1988, 10, 9, 2, 30, 0, "Asia/Seoul"))
        assert instant.is_dst is True
        later = bundled_clock.plus(instant, 1, TimeUnit.HOURS)
        assert local(later) == (1988, 10, 9, 2, 30, 0)
        assert later.is_dst is False

    def test_offset_change_1961(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        start = unwrap(bundled_clock.of(1961, 8, 9, 23, 59, 59, "Asia/Seoul"))
        assert start.offset_seconds == 30600
        after = bundled_clock.plus(start, 1, TimeUnit.MINUTES)
        assert local(after) == (1961, 8, 10, 0, 30, 59)
        assert after.offset_seconds == 9 * HOUR

    def test_skipped_half_hour_1961(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(bundled_clock.of(1961, 8, 10, 0, 15, 0, "Asia/Seoul"))
        assert local(instant) == (1961, 8, 10, 0, 45, 0)

    def test_repeated_half_hour_1954(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(bundled_clock.of(1954, 3, 20, 23, 45, 0, "Asia/Seoul"))
        assert instant.offset_seconds == 9 * HOUR

    def test_local_mean_time_before_1908(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(bundled_clock.of(1900, 1, 1, 0, 0, 0, "Asia/Seoul"))
        assert instant.offset_seconds == 8 * HOUR + 27 * 60 + 52
        assert instant.date == CivilDate(year=1900, month=1, day=1)

    def test_present_day(self, bundled_clock: ZonedClock, unwrap: Unwrap) -> None:
        instant = unwrap(bundled_clock.of(2024, 7, 1, 12, 0, 0, "Asia/Seoul"))
        assert instant.offset.isoformat() == "+09:00"
        assert instant.is_dst is False
