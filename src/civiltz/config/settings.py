"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``CIVILTZ_*`` prefix
  3. TOML file: ``civiltz.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from civiltz.config.models import FormatConfig, ZonesConfig

CONFIG_FILENAME = "civiltz.toml"
CONFIG_ENV_VAR = "CIVILTZ_CONFIG"


def _explicit_config(value: str, origin: str) -> Path:
    path = Path(value)
    if not path.is_file():
        msg = f"Config file from {origin} not found: {path}"
        raise click.ClickException(msg)
    return path


def find_config(start: Path | None = None) -> Path | None:
    """Locate civiltz.toml by walking up from *start* (default: cwd).

    ``CIVILTZ_CONFIG`` takes precedence over the walk and must name an
    existing file; a dangling value raises ``click.ClickException``.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _explicit_config(env_path, CONFIG_ENV_VAR)

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``civiltz.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class CivilSettings(BaseSettings):
    """Unified settings for the civiltz CLI.

    Attributes:
        project_root: Directory relative zone files resolve against
            (parent of ``civiltz.toml``, or CWD if no config found).
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CIVILTZ_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    zones: ZonesConfig = Field(default_factory=ZonesConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> CivilSettings:
        """Construct settings from CLI invocation.

        Discovers ``civiltz.toml`` via walk-up (or explicit *config_path*,
        which must exist) and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None
        if config_path:
            toml_path = _explicit_config(config_path, "--config")
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def zone_file_paths(self) -> list[Path]:
        """Configured zone files, relative entries resolved against project_root."""
        paths = [Path(entry) for entry in self.zones.files]
        return [p if p.is_absolute() else self.project_root / p for p in paths]
