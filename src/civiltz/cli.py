"""Root CLI group for civiltz with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from civiltz import __version__
from civiltz.commands import register_commands
from civiltz.commands._context import AppContext
from civiltz.config.settings import CivilSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="civiltz")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the resulting value.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--zone-file",
    "zone_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Extra TOML zone data file (repeatable).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    zone_files: tuple[Path, ...],
) -> None:
    """civiltz: calendar arithmetic and zone-rule resolution."""
    ctx.ensure_object(dict)
    settings = CivilSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, extra_zone_files=zone_files)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
