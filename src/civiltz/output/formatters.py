"""Output mode selection for ServiceResult.

The CLI renders results for humans (Rich), for scripts (--quiet, the bare
value), or for machines (--json, the serialized ServiceResult).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from civiltz.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from civiltz.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display in the requested mode."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
