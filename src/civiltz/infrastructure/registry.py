"""Process-wide zone registry.

Built once, on first use, from the bundled zone data plus any zone files
named in configuration. The table is sealed before it is handed out, so
concurrent readers need no further locking.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from civiltz.config.logging import get_logger
from civiltz.domain.zones import ZoneRuleTable
from civiltz.infrastructure.zonefile import load_bundled, load_zone_file

if TYPE_CHECKING:
    from civiltz.config.settings import CivilSettings

log = get_logger(__name__)

_lock = threading.Lock()
_registry: ZoneRuleTable | None = None


def build_registry(files: Iterable[Path] = (), *, include_bundled: bool = True) -> ZoneRuleTable:
    """Create and seal a new table from bundled data and *files*."""
    table = ZoneRuleTable()
    if include_bundled:
        load_bundled(table)
    for path in files:
        load_zone_file(path, table)
    table.seal()
    log.debug("zone_registry_built", zones=len(table))
    return table


def get_registry(settings: CivilSettings | None = None) -> ZoneRuleTable:
    """Return the process-wide table, building it on the first call.

    *settings* only matters for the first call; later calls return the
    table that call built.
    """
    global _registry
    with _lock:
        if _registry is None:
            if settings is None:
                _registry = build_registry()
            else:
                _registry = build_registry(
                    settings.zone_file_paths(),
                    include_bundled=settings.zones.include_bundled,
                )
        return _registry


def reset_registry() -> None:
    """Drop the process-wide table so the next call rebuilds it."""
    global _registry
    with _lock:
        _registry = None
