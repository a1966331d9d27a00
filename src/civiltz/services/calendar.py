"""CalendarService: plain date inspection and arithmetic."""

from __future__ import annotations

import logging
from typing import Any

from civiltz.domain import calendar, patterns
from civiltz.domain.calendar import CivilDate
from civiltz.services.base import BaseService
from civiltz.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

INVALID_PATTERN = "INVALID_PATTERN"


def date_data(date: CivilDate, pattern: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "date": date.isoformat(),
        "year": date.year,
        "month": date.month,
        "day": date.day,
        "day_of_week": calendar.day_of_week(date).name.lower(),
    }
    if pattern:
        data["formatted"] = patterns.format(date, pattern)
    return data


class CalendarService(BaseService):
    """Operations over :class:`CivilDate` values parsed from user text."""

    def show(self, text: str, *, pattern: str | None = None) -> ServiceResult:
        op = "show_date"
        parsed = calendar.parse_date(text)
        if parsed.value is None:
            return ServiceResult.failed(op, parsed.error)  # type: ignore[arg-type]
        date = parsed.value
        try:
            data = date_data(date, pattern)
        except ValueError as exc:
            return ServiceResult.failed(op, ServiceError(code=INVALID_PATTERN, message=str(exc)))
        data.update(
            leap_year=calendar.is_leap_year(date.year),
            days_in_month=calendar.days_in_month(date.year, date.month),
            epoch_day=calendar.to_epoch_day(date),
        )
        return ServiceResult(ok=True, op=op, data=data)

    def add(
        self,
        text: str,
        *,
        days: int = 0,
        months: int = 0,
        pattern: str | None = None,
    ) -> ServiceResult:
        """Shift a date by whole months, then by days."""
        op = "add_date"
        parsed = calendar.parse_date(text)
        if parsed.value is None:
            return ServiceResult.failed(op, parsed.error)  # type: ignore[arg-type]
        shifted = calendar.add_days(calendar.add_months(parsed.value, months), days)
        logger.debug("Shifted %s by %d months, %d days -> %s", parsed.value, months, days, shifted)
        try:
            data = date_data(shifted, pattern)
        except ValueError as exc:
            return ServiceResult.failed(op, ServiceError(code=INVALID_PATTERN, message=str(exc)))
        data["from"] = parsed.value.isoformat()
        return ServiceResult(ok=True, op=op, data=data)
