"""Static announcement blocks (intro, outro, message, cancel).

These are plain output helpers: no raw mode and no redraw. The ``format_*``
functions build Rich ``Text`` renderables; the matching helpers print them.
Rich drops the styling automatically when the output is not a terminal.
"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.text import Text

from .elements.symbols import BAR, BAR_END, BAR_START, STEP_SUBMIT

BAR_STYLE = "bright_black"
HINT_STYLE = "bright_black"


def _console(output: TextIO | None) -> Console:
    return Console(file=output, highlight=False, soft_wrap=True)


def _bar_line(text: Text, symbol: str = BAR) -> None:
    text.append(symbol, style=BAR_STYLE)


def format_intro(title: str, hint: str | None = None) -> Text:
    """Opening block: bar start with a bold title."""
    text = Text()
    _bar_line(text, BAR_START)
    text.append("  ")
    text.append(title, style="bold")
    text.append("\n")
    _bar_line(text)
    if hint:
        text.append("  ")
        text.append(hint, style=HINT_STYLE)
    return text


def _format_ending(message: str, style: str, hint: str | None) -> Text:
    text = Text()
    _bar_line(text)
    text.append("\n")
    _bar_line(text, BAR_END)
    text.append("  ")
    text.append(message, style=style)
    if hint:
        text.append("\n   ")
        text.append(hint, style=HINT_STYLE)
    text.append("\n")
    return text


def format_outro(message: str, hint: str | None = None) -> Text:
    """Closing block: bar end with a bold message."""
    return _format_ending(message, "bold", hint)


def format_cancel(message: str, hint: str | None = None) -> Text:
    """Closing block for an aborted flow: bar end with a red message."""
    return _format_ending(message, "red", hint)


def format_message(message: str, hint: str | None = None) -> Text:
    """Standalone note between prompts."""
    text = Text()
    _bar_line(text)
    text.append("\n")
    text.append(STEP_SUBMIT, style="green")
    text.append("  ")
    text.append(message, style="bold")
    text.append("\n")
    _bar_line(text)
    if hint:
        text.append("  ")
        text.append(hint, style=HINT_STYLE)
    return text


def intro(title: str, hint: str | None = None, output: TextIO | None = None) -> None:
    _console(output).print(format_intro(title, hint))


def outro(message: str, hint: str | None = None, output: TextIO | None = None) -> None:
    _console(output).print(format_outro(message, hint))


def message(text: str, hint: str | None = None, output: TextIO | None = None) -> None:
    _console(output).print(format_message(text, hint))


def cancel(message: str, hint: str | None = None, output: TextIO | None = None) -> None:
    _console(output).print(format_cancel(message, hint))
