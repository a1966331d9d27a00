"""Shared pytest fixtures for civiltz tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from civiltz.domain import calendar
from civiltz.domain.clock import ZonedClock
from civiltz.domain.result import Result
from civiltz.domain.zones import ZoneRuleTable, ZoneTransition
from civiltz.infrastructure.registry import build_registry, reset_registry

HOUR = 3600


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    """Epoch seconds for a UTC civil date-time."""
    return calendar.to_epoch_seconds(
        calendar.CivilDate(year=year, month=month, day=day),
        calendar.CivilTime(hour=hour, minute=minute, second=second),
    )


@pytest.fixture
def unwrap() -> Callable[[Result[Any]], Any]:
    """Return the value of a successful Result, failing the test otherwise."""

    def _unwrap(result: Result[Any]) -> Any:
        assert result.ok, result.error
        return result.value

    return _unwrap


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def bundled_table() -> ZoneRuleTable:
    """A fresh table holding only the bundled zone data."""
    return build_registry()


@pytest.fixture
def bundled_clock(bundled_table: ZoneRuleTable) -> ZonedClock:
    return ZonedClock(bundled_table)


@pytest.fixture
def dst_table() -> ZoneRuleTable:
    """Hand-built zone "Test/Summer": +01:00 standard, +02:00 summer in 2021.

    Spring forward at 2021-03-28 01:00 UTC (local 02:00 -> 03:00),
    fall back at 2021-10-31 01:00 UTC (local 03:00 -> 02:00).
    """
    table = ZoneRuleTable()
    table.register(
        "Test/Summer",
        [
            ZoneTransition(
                effective_instant=utc(2021, 3, 28, 1), offset_seconds=2 * HOUR, is_dst=True
            ),
            ZoneTransition(effective_instant=utc(2021, 10, 31, 1), offset_seconds=HOUR),
        ],
        standard_offset_seconds=HOUR,
    )
    table.register("UTC", [], standard_offset_seconds=0)
    return table


@pytest.fixture
def dst_clock(dst_table: ZoneRuleTable) -> ZonedClock:
    return ZonedClock(dst_table)


@pytest.fixture(autouse=True)
def _fresh_registry() -> Iterator[None]:
    """Each test sees a process-wide registry built from scratch."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config discovery leaking in.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.delenv("CIVILTZ_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def epoch() -> Callable[..., int]:
    """The :func:`utc` helper, for tests that build their own transitions."""
    return utc
