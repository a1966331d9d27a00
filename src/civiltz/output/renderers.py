"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from civiltz.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from civiltz.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: the rendered value only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if result.op == "list_zones":
        return "\n".join(zone["id"] for zone in result.data.get("zones", []))
    data = result.data.get("to", result.data)
    for key in ("formatted", "datetime", "date", "id"):
        if key in data:
            return str(data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="civil.ok"), Text(f"  {result.op}", style="civil.op"))


def _field(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    k = Text(f"{' ' * indent}{key}: ", style="civil.key")
    if key == "zone" or key == "id":
        v = Text(str(value), style="civil.zone")
    elif key == "dst" and value:
        v = Text(str(value), style="civil.dst")
    elif key in ("formatted", "datetime", "date"):
        v = Text(str(value), style="civil.value")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _transition_table(transitions: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("At (UTC)", no_wrap=True)
    table.add_column("Offset", justify="right")
    table.add_column("DST")
    for item in transitions:
        table.add_row(item["at"], item["offset"], "yes" if item["dst"] else "")
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text.assemble(
            ("ERROR", "civil.error"),
            (f"  {result.op}{code}", "civil.op"),
            f": {msg}",
        )
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_plus(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "step", f"{result.data['amount']:+d} {result.data['unit']}")
    for side in ("from", "to"):
        console.print(Text(f"  {side}:", style="civil.key"))
        for key, value in result.data[side].items():
            _field(console, key, value, indent=4)


def _render_zone_list(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Zone", style="civil.zone", no_wrap=True)
    table.add_column("Standard offset", justify="right")
    table.add_column("Transitions", justify="right")
    for zone in result.data.get("zones", []):
        table.add_row(zone["id"], zone["standard_offset"], str(zone["transition_count"]))
    console.print(table)


def _render_zone(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "id", result.data["id"])
    _field(console, "standard_offset", result.data["standard_offset"])
    if result.data["transitions"]:
        console.print(_transition_table(result.data["transitions"]))
    if "at" in result.data:
        console.print(Text("  at:", style="civil.key"))
        for key, value in result.data["at"].items():
            _field(console, key, value, indent=4)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "plus": _render_plus,
    "list_zones": _render_zone_list,
    "show_zone": _render_zone,
}
