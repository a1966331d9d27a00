"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, civiltz.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ZonesConfig(BaseModel):
    """[zones] section."""

    model_config = {"frozen": True}

    default_zone: str = "UTC"
    include_bundled: bool = True
    files: list[str] = Field(default_factory=list)


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    date_pattern: str = "yyyy-MM-dd"
    datetime_pattern: str = "yyyy-MM-dd HH:mm:ss"
