"""Runtime configuration for sessionkeeper.

Settings are read from environment variables prefixed with ``SESSIONKEEPER_``,
e.g. ``SESSIONKEEPER_ROOT=/data/claude/projects`` or
``SESSIONKEEPER_PREVIEW_CHARS=500``. CLI flags override them.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PREVIEW_CHARS = 2000
MAX_SCAN_WORKERS = 8


def default_max_workers() -> int:
    """Worker threads for per-project scans: min(cpu_count, 8)."""
    return min(os.cpu_count() or 1, MAX_SCAN_WORKERS)


class Settings(BaseSettings):
    """sessionkeeper settings."""

    model_config = SettingsConfigDict(env_prefix="SESSIONKEEPER_", extra="ignore")

    root: Optional[Path] = Field(
        None, description="Explicit managed root; disables probing of default locations"
    )
    preview_chars: int = Field(
        DEFAULT_PREVIEW_CHARS, gt=0, description="Character budget for content previews"
    )
    max_workers: Optional[int] = Field(
        None, ge=1, le=32, description="Scan worker threads (default: min(cpu_count, 8))"
    )
    log_level: str = Field("WARNING", description="Log level for the CLI stderr sink")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def scan_workers(self) -> int:
        return self.max_workers or default_max_workers()


def get_settings(**overrides) -> Settings:
    """Load settings from the environment, applying non-None overrides."""
    values = {k: v for k, v in overrides.items() if v is not None}
    return Settings(**values)
