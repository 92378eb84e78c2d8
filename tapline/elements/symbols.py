"""Glyphs and color helpers used to draw prompt frames."""

from __future__ import annotations

from .base import PromptState
from .terminal import ANSI

# Step symbols
STEP_ACTIVE = "◆"
STEP_CANCEL = "■"
STEP_ERROR = "▲"
STEP_SUBMIT = "◇"

# Bar symbols
BAR = "│"
BAR_START = "┌"
BAR_END = "└"

# Radio symbols
RADIO_ACTIVE = "●"
RADIO_INACTIVE = "○"

# Checkbox symbols for multiselect
CHECKBOX_CHECKED = "◼"
CHECKBOX_UNCHECKED = "◻"

PASSWORD_MASK = "●"


def _paint(code: str, s: str) -> str:
    return f"{code}{s}{ANSI.RESET}"


def gray(s: str) -> str:
    return _paint(ANSI.GRAY, s)


def red(s: str) -> str:
    return _paint(ANSI.RED, s)


def green(s: str) -> str:
    return _paint(ANSI.GREEN, s)


def yellow(s: str) -> str:
    return _paint(ANSI.YELLOW, s)


def cyan(s: str) -> str:
    return _paint(ANSI.CYAN, s)


def dim(s: str) -> str:
    return _paint(ANSI.DIM, s)


def inverse(s: str) -> str:
    return _paint(ANSI.REVERSE, s)


def strikethrough(s: str) -> str:
    return _paint(ANSI.STRIKETHROUGH, s)


def state_symbol(state: PromptState, error: bool = False) -> str:
    """Colored step symbol for the title line of a prompt."""
    if state is PromptState.SUBMITTED:
        return green(STEP_SUBMIT)
    if state is PromptState.CANCELED:
        return red(STEP_CANCEL)
    if error:
        return yellow(STEP_ERROR)
    return cyan(STEP_ACTIVE)


def title_lines(message: str, state: PromptState, error: bool = False) -> list[str]:
    """Opening rows shared by every prompt: a spacer bar and the message."""
    return [gray(BAR), f"{state_symbol(state, error)}  {message}"]
