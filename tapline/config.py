"""Runtime settings for tapline, read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_PASTE_LIMIT = 1_000_000


def _parse_bool(value: str | None, default: bool) -> bool:
    """Parse a truthy/falsy toggle from environment settings."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_int(value: str | None, default: int) -> int:
    """Parse a positive integer setting, returning the default on invalid input."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_level(value: str | None, default: int) -> int:
    """Parse a log level name or number."""
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings.

    TAPLINE_DEBUG_KEYS   log unknown escape sequences at DEBUG
    TAPLINE_LOG_LEVEL    level for configure_logging() (default INFO)
    TAPLINE_LOG_FILE     log file for configure_logging() (unset: no logging)
    TAPLINE_PASTE_LIMIT  max characters kept from one bracketed paste
    """

    debug_keys: bool = False
    log_level: int = logging.INFO
    log_file: str | None = None
    paste_limit: int = DEFAULT_PASTE_LIMIT


def load_settings() -> Settings:
    """Load settings from environment variables, falling back to defaults."""
    return Settings(
        debug_keys=_parse_bool(os.getenv("TAPLINE_DEBUG_KEYS"), False),
        log_level=_parse_level(os.getenv("TAPLINE_LOG_LEVEL"), logging.INFO),
        log_file=os.getenv("TAPLINE_LOG_FILE") or None,
        paste_limit=_parse_int(os.getenv("TAPLINE_PASTE_LIMIT"), DEFAULT_PASTE_LIMIT),
    )
