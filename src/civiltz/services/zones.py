"""ZoneService: registry inspection."""

from __future__ import annotations

from typing import Any

from civiltz.domain import calendar
from civiltz.domain.zones import ZoneRules
from civiltz.services.base import BaseService
from civiltz.services.clock import instant_data
from civiltz.services.result import ServiceResult


def _utc_text(epoch_seconds: int) -> str:
    date, time = calendar.from_epoch_seconds(epoch_seconds)
    return f"{date.isoformat()}T{time.isoformat()}Z"


def rules_data(rules: ZoneRules) -> dict[str, Any]:
    return {
        "id": rules.zone_id,
        "standard_offset": rules.standard_offset.isoformat(),
        "transitions": [
            {
                "at": _utc_text(t.effective_instant),
                "offset": t.offset.isoformat(),
                "dst": t.is_dst,
            }
            for t in rules.transitions
        ],
    }


class ZoneService(BaseService):
    def list_zones(self) -> ServiceResult:
        zones = [
            {
                "id": rules.zone_id,
                "standard_offset": rules.standard_offset.isoformat(),
                "transition_count": len(rules.transitions),
            }
            for rules in self._table
        ]
        return ServiceResult(ok=True, op="list_zones", data={"count": len(zones), "zones": zones})

    def show(self, zone_id: str, *, at: str | None = None) -> ServiceResult:
        """Zone rules, plus the resolved offset at local time *at* if given."""
        op = "show_zone"
        found = self._table.lookup(zone_id)
        if found.value is None:
            return ServiceResult.failed(op, found.error)  # type: ignore[arg-type]
        data = rules_data(found.value)
        if at is not None:
            parsed = self._clock.parse(at, zone_id)
            if parsed.value is None:
                return ServiceResult.failed(op, parsed.error)  # type: ignore[arg-type]
            data["at"] = instant_data(parsed.value)
        return ServiceResult(ok=True, op=op, data=data)
