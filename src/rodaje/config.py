"""Configuration loading for rodaje.

A single optional file (rodaje_config.yaml) tunes the phase offsets and the
calendar grid. Every setting has a default, so running without a config file
behaves exactly like the stock policy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from . import context
from .dates import Weekday

CONFIG_FILENAME = "rodaje_config.yaml"

DEFAULT_DAY_CAPACITY = 4


class PhaseOffsetPolicy(BaseModel):
    """Where the derived phases sit relative to the primary range."""

    # Fitting starts this many days from the primary start (negative = before)
    fitting_offset_days: int = -2
    fitting_length_days: int = Field(default=1, ge=1)
    # Preparation starts this many days from the fitting start
    prep_offset_from_fitting_days: int = -6
    prep_length_days: int = Field(default=6, ge=1)


class CalendarConfig(BaseModel):
    """Month grid layout."""

    week_start: Weekday = Weekday.MONDAY
    # Projects shown per day cell; confirmed ones take precedence
    day_capacity: int = Field(default=DEFAULT_DAY_CAPACITY, ge=1)

    @field_validator("week_start", mode="before")
    @classmethod
    def parse_week_start(cls, v: Any) -> Weekday:
        """Accept weekday names as well as numbers."""
        if isinstance(v, Weekday):
            return v
        if isinstance(v, str | int):
            return Weekday.parse(v)
        raise ValueError(f"Invalid week_start: {v!r}")


class RodajeConfig(BaseModel):
    """Top-level configuration."""

    phases: PhaseOffsetPolicy = PhaseOffsetPolicy()
    calendar: CalendarConfig = CalendarConfig()


def load_config(config_path: Path | str) -> RodajeConfig:
    """Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Config must contain a mapping at the root level")

    unknown = set(data) - set(RodajeConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    # pydantic.ValidationError is a ValueError subclass
    return RodajeConfig.model_validate(data)


def discover_config(
    project_file: Path | str | None = None,
    config_path: Path | None = None,
) -> RodajeConfig:
    """Find and load the config, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. project file directory / rodaje_config.yaml
    4. Current directory / rodaje_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return load_config(ctx_config)

    if project_file is not None:
        dir_config = Path(project_file).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return RodajeConfig()
