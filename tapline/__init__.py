"""tapline: interactive command-line prompts.

Text, password, autocomplete, select, multi-select and confirm prompts that
redraw a single screen region in place, plus a caller-driven progress bar and
static announcement helpers.

Every prompt returns a PromptResult: ``Submitted(value)`` or ``CANCELED``.

    import asyncio
    import tapline

    async def main() -> None:
        tapline.intro("create-app")
        name = await tapline.text("Project name?", placeholder="my-app")
        if tapline.is_cancel(name):
            tapline.cancel("Operation cancelled")
            return
        tapline.outro(f"Created {name.value}")

    asyncio.run(main())
"""

import logging

# Cancellation support
from .cancellation import CancellationToken

# Configuration and logging
from .config import Settings, load_settings
from .log_utils import configure_logging

# Elements
from .elements import Option, Progress, PromptEngine, TerminalSession

# Errors
from .errors import (
    AlreadyOpenError,
    NotATTYError,
    SessionClosedError,
    TerminalError,
    ValidationError,
)

# Static announcements
from .messages import cancel, intro, message, outro

# Prompts
from .prompts import autocomplete, confirm, multiselect, password, select, text

# Results
from .result import CANCELED, Canceled, PromptResult, Submitted, is_cancel

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Prompts
    "text",
    "password",
    "select",
    "multiselect",
    "confirm",
    "autocomplete",
    "Option",
    # Progress and announcements
    "Progress",
    "intro",
    "outro",
    "message",
    "cancel",
    # Results
    "PromptResult",
    "Submitted",
    "Canceled",
    "CANCELED",
    "is_cancel",
    # Runtime
    "PromptEngine",
    "TerminalSession",
    "CancellationToken",
    # Errors
    "TerminalError",
    "NotATTYError",
    "AlreadyOpenError",
    "SessionClosedError",
    "ValidationError",
    # Configuration
    "Settings",
    "load_settings",
    "configure_logging",
]
