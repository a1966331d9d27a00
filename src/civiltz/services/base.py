"""BaseService: shared foundation for civiltz services.

Every service receives the zone table it resolves against. Services never
mutate the table; they only look zones up through it.
"""

from __future__ import annotations

from civiltz.domain.clock import ZonedClock
from civiltz.domain.zones import ZoneRuleTable


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ClockService(BaseService):
            def show(self, text: str, zone_id: str) -> ServiceResult:
                parsed = self._clock.parse(text, zone_id)
                ...
    """

    def __init__(self, table: ZoneRuleTable) -> None:
        self._table = table
        self._clock = ZonedClock(table)
