"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import Grammar, LogFormat


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ObservabilityConfig(BaseModel):
    log_level: str = "WARNING"
    log_format: LogFormat = LogFormat.CONSOLE


class CLIConfig(BaseModel):
    ascii_only: bool = False  # Reject internationalized input
    default_grammar: Grammar = Grammar.TRANSPORT  # Target for `convert`


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level settings.

    Loaded from a TOML config file, overridden by environment variables
    (``EMAIL_ADDRESS_OBSERVABILITY__LOG_LEVEL=DEBUG``).
    """

    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)

    model_config = {"env_prefix": "EMAIL_ADDRESS_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional, ignored if missing).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
