"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets the schema checker and the restore planner read policy values in one
  consistent way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mac_blueprint.core.domain.models import LEGACY_SCHEMA_VERSION, SCHEMA_VERSION


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "mac-blueprint"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mac-blueprint"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mac-blueprint"
    return Path.home() / ".config" / "mac-blueprint"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class BlueprintSettings(BaseSettings):
    """Application-wide settings.

    Why pydantic-settings:
    - Typed, validated at the edge (env vars), no parsing logic in the core.
    - One configuration contract for the CLI and the services.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAC_BLUEPRINT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    schema_version: str = Field(
        default=SCHEMA_VERSION,
        pattern=r"^\d+\.\d+$",
        description="Schema version this installation writes and checks against.",
    )
    legacy_schema_version: str = Field(
        default=LEGACY_SCHEMA_VERSION,
        pattern=r"^\d+\.\d+$",
        description="Version assumed for documents captured without a `version` field.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    formula_batch_size: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Homebrew formulae per install batch in restore plans.",
    )
    cask_batch_size: int = Field(
        default=30,
        ge=1,
        le=500,
        description="Homebrew casks per install batch in restore plans.",
    )
