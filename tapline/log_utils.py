"""Logging configuration.

Prompts own the terminal while they run, so log records are never written to
stdout or stderr. ``configure_logging`` attaches a file handler only when a
log file is configured.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings, load_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "tapline-file"


def configure_logging(settings: Settings | None = None) -> logging.Handler | None:
    """Attach a file handler to the ``tapline`` logger.

    Returns the installed handler, or None when no log file is configured.
    Calling this again replaces the previous handler.
    """
    settings = settings or load_settings()
    logger = logging.getLogger("tapline")

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    if not settings.log_file:
        return None

    path = Path(settings.log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
    return handler
