"""Environment-driven configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import ConfigError

DEFAULT_BUFFER_SIZE = 1 << 16
OUTPUT_FORMATS = ("text", "yaml", "json")


class DiffOptions(BaseModel):
    """Options controlling a zone comparison."""

    model_config = ConfigDict(frozen=True)

    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, ge=1, description="Ring capacity in record sets")
    ignore_serial: bool = False
    skip_dnssec: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Application-wide configuration values."""

    buffer_size: int
    ignore_serial: bool
    skip_dnssec: bool
    verbose: bool
    output_format: str
    log_level: str


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Return a boolean parsed from a string."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_int(name: str, default: int) -> int:
    """Return an integer environment value."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from exc


def build_options(
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    ignore_serial: bool = False,
    skip_dnssec: bool = False,
    verbose: bool = False,
) -> DiffOptions:
    """Validate option values into :class:`DiffOptions`."""
    try:
        return DiffOptions(
            buffer_size=buffer_size,
            ignore_serial=ignore_serial,
            skip_dnssec=skip_dnssec,
            verbose=verbose,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid diff options: {exc}") from exc


def load_config() -> AppConfig:
    """Load configuration values from the environment (and .env)."""
    load_dotenv(find_dotenv(usecwd=True))
    output_format = os.getenv("ZONEDIFF_FORMAT", "text").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"ZONEDIFF_FORMAT must be one of {', '.join(OUTPUT_FORMATS)}.")

    config = AppConfig(
        buffer_size=_parse_int("ZONEDIFF_BUFFER_SIZE", DEFAULT_BUFFER_SIZE),
        ignore_serial=_parse_bool(os.getenv("ZONEDIFF_IGNORE_SERIAL")),
        skip_dnssec=_parse_bool(os.getenv("ZONEDIFF_SKIP_DNSSEC")),
        verbose=_parse_bool(os.getenv("ZONEDIFF_VERBOSE")),
        output_format=output_format,
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
    )
    if config.buffer_size < 1:
        raise ConfigError("ZONEDIFF_BUFFER_SIZE must be at least 1.")
    return config
