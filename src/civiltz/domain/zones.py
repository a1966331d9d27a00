"""Zone rules and the zone rule table.

A zone is an ordered list of UTC-offset transitions. Before the first
transition the zone's standard (non-DST) offset applies.

INVARIANT: A table is sealed by its first lookup. Registration after that
point is a programming error and raises ``RuntimeError``.
"""

from __future__ import annotations

import bisect
import logging
import threading
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, Field

from civiltz.domain.result import Result, UnknownZoneId, failure, success

logger = logging.getLogger(__name__)


class ZoneOffset(BaseModel):
    """UTC offset in effect at an instant."""

    model_config = {"frozen": True}

    offset_seconds: int
    is_dst: bool = False

    def isoformat(self) -> str:
        sign = "-" if self.offset_seconds < 0 else "+"
        hours, remainder = divmod(abs(self.offset_seconds), 3600)
        minutes, seconds = divmod(remainder, 60)
        text = f"{sign}{hours:02d}:{minutes:02d}"
        if seconds:
            text += f":{seconds:02d}"
        return text


class ZoneTransition(BaseModel):
    """A recorded instant at which a zone's offset or DST flag changes."""

    model_config = {"frozen": True}

    effective_instant: int
    offset_seconds: int
    is_dst: bool = False

    @property
    def offset(self) -> ZoneOffset:
        return ZoneOffset(offset_seconds=self.offset_seconds, is_dst=self.is_dst)


class ZoneRules(BaseModel):
    """Immutable transition history for one zone identifier."""

    model_config = {"frozen": True}

    zone_id: str
    standard_offset_seconds: int
    transitions: tuple[ZoneTransition, ...] = Field(default_factory=tuple)

    @property
    def standard_offset(self) -> ZoneOffset:
        return ZoneOffset(offset_seconds=self.standard_offset_seconds)

    def _index(self, epoch_seconds: int) -> int:
        """Index of the transition governing *epoch_seconds*, or -1 before the first."""
        return (
            bisect.bisect_right(
                self.transitions, epoch_seconds, key=lambda t: t.effective_instant
            )
            - 1
        )

    def _offset_for_index(self, index: int) -> ZoneOffset:
        if index < 0:
            return self.standard_offset
        return self.transitions[index].offset

    def offset_at(self, epoch_seconds: int) -> ZoneOffset:
        return self._offset_for_index(self._index(epoch_seconds))

    def offset_before(self, epoch_seconds: int) -> ZoneOffset:
        """Offset of the period preceding the one containing *epoch_seconds*."""
        return self._offset_for_index(max(self._index(epoch_seconds) - 1, -1))

    def transition_governing(self, epoch_seconds: int) -> ZoneTransition | None:
        index = self._index(epoch_seconds)
        return self.transitions[index] if index >= 0 else None

    def is_daylight_savings(self, epoch_seconds: int) -> bool:
        return self.offset_at(epoch_seconds).is_dst


class ZoneRuleTable:
    """Registry of zone rules keyed by identifier.

    Populated during initialization, read-only once the first lookup
    has happened.
    """

    def __init__(self) -> None:
        self._zones: dict[str, ZoneRules] = {}
        self._sealed = False
        self._lock = threading.Lock()

    def register(
        self,
        zone_id: str,
        transitions: Iterable[ZoneTransition],
        *,
        standard_offset_seconds: int,
    ) -> ZoneRules:
        """Add a zone. *transitions* must already be sorted ascending."""
        with self._lock:
            if self._sealed:
                msg = f"Cannot register {zone_id!r}: zone table is sealed"
                raise RuntimeError(msg)
            if zone_id in self._zones:
                msg = f"Zone {zone_id!r} is already registered"
                raise ValueError(msg)
            rules = ZoneRules(
                zone_id=zone_id,
                standard_offset_seconds=standard_offset_seconds,
                transitions=tuple(transitions),
            )
            self._zones[zone_id] = rules
        logger.debug("Registered zone %s (%d transitions)", zone_id, len(rules.transitions))
        return rules

    def seal(self) -> None:
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def lookup(self, zone_id: str) -> Result[ZoneRules]:
        if not self._sealed:
            self.seal()
        rules = self._zones.get(zone_id)
        if rules is None:
            return failure(
                UnknownZoneId(
                    message=f"Unknown time-zone id: {zone_id!r}",
                    detail={"zone_id": zone_id},
                )
            )
        return success(rules)

    def zone_ids(self) -> list[str]:
        return sorted(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[ZoneRules]:
        return iter(self._zones[zone_id] for zone_id in self.zone_ids())
