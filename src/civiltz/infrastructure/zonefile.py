"""TOML zone data files.

Each ``[[zones]]`` table names a zone id, its standard offset, and an
ascending list of transitions given as UTC civil instants::

    [[zones]]
    id = "Asia/Seoul"
    standard_offset = "+08:27:52"
    transitions = [
        { at = "1988-05-07T17:00:00", offset = "+10:00", dst = true },
    ]
"""

from __future__ import annotations

import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from civiltz.config.logging import get_logger
from civiltz.domain import calendar
from civiltz.domain.zones import ZoneRuleTable, ZoneTransition

log = get_logger(__name__)

BUNDLED_RESOURCE = "zones.toml"

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})(?::(\d{2}))?$")


class ZoneFileError(Exception):
    """A zone data file is unreadable or malformed."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class TransitionEntry(BaseModel):
    at: str
    offset: str
    dst: bool = False


class ZoneEntry(BaseModel):
    id: str
    standard_offset: str
    transitions: list[TransitionEntry] = Field(default_factory=list)


class ZoneFile(BaseModel):
    zones: list[ZoneEntry] = Field(default_factory=list)


def parse_offset(text: str) -> int:
    """``+HH:MM[:SS]`` to signed seconds."""
    match = _OFFSET_RE.match(text.strip())
    if match is None:
        msg = f"Invalid UTC offset {text!r} (expected +HH:MM[:SS])"
        raise ValueError(msg)
    sign, hours, minutes, seconds = match.groups()
    total = int(hours) * 3600 + int(minutes) * 60 + int(seconds or 0)
    return -total if sign == "-" else total


def parse_utc_instant(text: str) -> int:
    """``YYYY-MM-DDTHH:MM[:SS]`` read as UTC, to epoch seconds."""
    date_text, _, time_text = text.partition("T")
    date = calendar.parse_date(date_text)
    time = calendar.parse_time(time_text or "00:00")
    error = date.error or time.error
    if error is not None or date.value is None or time.value is None:
        msg = f"Invalid instant {text!r}: {error.message if error else 'unparseable'}"
        raise ValueError(msg)
    return calendar.to_epoch_seconds(date.value, time.value)


def _transitions(entry: ZoneEntry) -> list[ZoneTransition]:
    transitions = [
        ZoneTransition(
            effective_instant=parse_utc_instant(item.at),
            offset_seconds=parse_offset(item.offset),
            is_dst=item.dst,
        )
        for item in entry.transitions
    ]
    for previous, current in zip(transitions, transitions[1:], strict=False):
        if current.effective_instant <= previous.effective_instant:
            msg = f"transitions must be strictly ascending (at {current.effective_instant})"
            raise ValueError(msg)
    return transitions


def load_zone_data(data: dict[str, Any], table: ZoneRuleTable, *, source: str) -> list[str]:
    """Register every zone in parsed TOML *data* into *table*.

    Returns the registered zone ids in file order.
    """
    try:
        parsed = ZoneFile.model_validate(data)
    except ValidationError as exc:
        raise ZoneFileError(source, str(exc)) from exc

    registered: list[str] = []
    for entry in parsed.zones:
        try:
            transitions = _transitions(entry)
            standard = parse_offset(entry.standard_offset)
            table.register(entry.id, transitions, standard_offset_seconds=standard)
        except ValueError as exc:
            raise ZoneFileError(source, f"zone {entry.id!r}: {exc}") from exc
        registered.append(entry.id)
    log.debug("zone_file_loaded", source=source, zones=len(registered))
    return registered


def load_zone_file(path: Path, table: ZoneRuleTable) -> list[str]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ZoneFileError(str(path), f"cannot read file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ZoneFileError(str(path), f"invalid TOML: {exc}") from exc
    return load_zone_data(data, table, source=str(path))


def load_bundled(table: ZoneRuleTable) -> list[str]:
    """Register the zones shipped in ``civiltz/data/zones.toml``."""
    resource = resources.files("civiltz").joinpath(f"data/{BUNDLED_RESOURCE}")
    data = tomllib.loads(resource.read_text(encoding="utf-8"))
    return load_zone_data(data, table, source=f"civiltz:data/{BUNDLED_RESOURCE}")
