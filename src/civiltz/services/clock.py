"""ClockService: zoned date-time resolution and arithmetic."""

from __future__ import annotations

import logging
from typing import Any

from civiltz.domain import patterns
from civiltz.domain.clock import ZonedInstant
from civiltz.domain.types import TimeUnit
from civiltz.services.base import BaseService
from civiltz.services.calendar import INVALID_PATTERN
from civiltz.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def instant_data(instant: ZonedInstant, pattern: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "datetime": instant.isoformat(),
        "zone": instant.zone_id,
        "offset": instant.offset.isoformat(),
        "dst": instant.is_dst,
        "epoch_seconds": instant.epoch_seconds,
    }
    if pattern:
        data["formatted"] = patterns.format(instant, pattern)
    return data


class ClockService(BaseService):
    """Operations over local date-times interpreted in a zone."""

    def show(self, text: str, zone_id: str, *, pattern: str | None = None) -> ServiceResult:
        op = "show_zoned"
        parsed = self._clock.parse(text, zone_id)
        if parsed.value is None:
            return ServiceResult.failed(op, parsed.error)  # type: ignore[arg-type]
        try:
            data = instant_data(parsed.value, pattern)
        except ValueError as exc:
            return ServiceResult.failed(op, ServiceError(code=INVALID_PATTERN, message=str(exc)))
        return ServiceResult(ok=True, op=op, data=data)

    def plus(
        self,
        text: str,
        zone_id: str,
        amount: int,
        unit: TimeUnit,
        *,
        pattern: str | None = None,
    ) -> ServiceResult:
        op = "plus"
        parsed = self._clock.parse(text, zone_id)
        if parsed.value is None:
            return ServiceResult.failed(op, parsed.error)  # type: ignore[arg-type]
        start = parsed.value
        end = self._clock.plus(start, amount, unit)
        logger.debug("%s plus %d %s -> %s", start, amount, unit, end)

        warnings: list[str] = []
        if start.offset_seconds != end.offset_seconds:
            warnings.append(
                f"UTC offset changed from {start.offset.isoformat()} to {end.offset.isoformat()}"
            )
        try:
            data = {
                "from": instant_data(start, pattern),
                "to": instant_data(end, pattern),
                "amount": amount,
                "unit": unit.value,
            }
        except ValueError as exc:
            return ServiceResult.failed(op, ServiceError(code=INVALID_PATTERN, message=str(exc)))
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
