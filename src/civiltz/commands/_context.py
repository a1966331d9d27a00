"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy zone-table initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from civiltz.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from civiltz.config.settings import CivilSettings
    from civiltz.domain.zones import ZoneRuleTable
    from civiltz.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The zone table is built on first use so ``--help`` and ``--version``
    never read zone data.
    """

    def __init__(self, settings: CivilSettings, *, extra_zone_files: tuple[Path, ...] = ()) -> None:
        self.settings = settings
        self.extra_zone_files = extra_zone_files
        self._table: ZoneRuleTable | None = None

        from civiltz.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def table(self) -> ZoneRuleTable:
        """The zone table (built lazily on first access).

        Default configuration shares the process-wide registry; any extra
        zone files get a table of their own.
        """
        if self._table is None:
            from civiltz.infrastructure.registry import build_registry, get_registry
            from civiltz.infrastructure.zonefile import ZoneFileError

            files = [*self.settings.zone_file_paths(), *self.extra_zone_files]
            try:
                if files or not self.settings.zones.include_bundled:
                    self._table = build_registry(
                        files, include_bundled=self.settings.zones.include_bundled
                    )
                else:
                    self._table = get_registry(self.settings)
            except ZoneFileError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._table

    def zone(self, zone_id: str | None) -> str:
        """*zone_id*, or the configured default zone."""
        return zone_id or self.settings.zones.default_zone

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
