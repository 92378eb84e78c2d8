"""Caller-driven progress bar.

Progress shares the prompt Renderer but is not key-driven: it does not take
the terminal into raw mode and has no refresh thread. Every frame is the
result of an explicit start/advance/message/stop call.

Usage:
    progress = Progress(style="light", total=20, size=30)
    progress.start("Installing packages...")
    for name in packages:
        install(name)
        progress.advance(1, f"Installed {name}")
    progress.stop("Done", 0)
"""

from __future__ import annotations

import sys
from typing import Callable, TextIO

from .renderer import Renderer
from .symbols import (
    BAR,
    STEP_ACTIVE,
    STEP_CANCEL,
    STEP_ERROR,
    STEP_SUBMIT,
    cyan,
    dim,
    gray,
    green,
    red,
)

DEFAULT_TOTAL = 100
DEFAULT_SIZE = 40
DEFAULT_STYLE = "heavy"

# Progress bar character styles
PROGRESS_CHARS = {
    "light": "─",
    "heavy": "━",
    "block": "█",
}


class Progress:
    """Progress bar with a label.

    Args:
        style: "light", "heavy" or "block"; unknown styles draw as heavy.
        total: Units of work that make the bar full (default 100).
        size: Bar width in cells (default 40).
        output: Stream to draw on (default sys.stdout).

    Non-positive ``total`` or ``size`` fall back to the defaults.
    """

    def __init__(
        self,
        style: str = DEFAULT_STYLE,
        total: int = DEFAULT_TOTAL,
        size: int = DEFAULT_SIZE,
        output: TextIO | None = None,
    ) -> None:
        self.style = style if style in PROGRESS_CHARS else DEFAULT_STYLE
        self.total = total if total > 0 else DEFAULT_TOTAL
        self.size = size if size > 0 else DEFAULT_SIZE
        self.current = 0
        self.label = ""
        self.hint: str | None = None
        self.exit_code: int | None = None
        self._active = False
        self._renderer = Renderer(output if output is not None else sys.stdout)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def filled(self) -> int:
        """Number of filled cells for the current value."""
        return round(self.size * self.current / self.total)

    def start(self, label: str = "") -> None:
        """Show an empty bar. Ignored while already running."""
        if self._active:
            return
        self._active = True
        self.current = 0
        self.label = label
        self.hint = None
        self.exit_code = None
        self._renderer.render(self.get_lines())

    def advance(self, delta: int = 1, label: str | None = None) -> None:
        """Move forward by ``delta`` (clamped at total), optionally relabel.

        Ignored before start() and after stop(); non-positive deltas only
        update the label.
        """
        if not self._active:
            return
        if delta > 0:
            self.current = min(self.current + delta, self.total)
        if label:
            self.label = label
        self._renderer.render(self.get_lines())

    def message(self, label: str) -> None:
        """Update the label without advancing."""
        self.advance(0, label)

    def stop(self, label: str = "", exit_code: int = 0, hint: str | None = None) -> None:
        """Draw the final state and release the screen region.

        ``exit_code`` 0 fills the bar and shows the completion marker; 1 shows
        the cancel marker and any other code the error marker, leaving the bar
        where it was.
        """
        if not self._active:
            return
        self._active = False
        self.exit_code = exit_code
        if exit_code == 0:
            self.current = self.total
        if label:
            self.label = label
        self.hint = hint
        self._renderer.render(self.get_lines())
        self._renderer.finish()

    def _bar(self, paint: Callable[[str], str]) -> str:
        char = PROGRESS_CHARS[self.style]
        filled = self.filled
        return paint(char * filled) + dim(char * (self.size - filled))

    def get_lines(self) -> list[str]:
        if self._active:
            return [
                gray(BAR),
                f"{cyan(STEP_ACTIVE)}  {self.label}",
                f"{cyan(BAR)}  {self._bar(cyan)}",
            ]

        if self.exit_code == 0:
            symbol, paint = green(STEP_SUBMIT), green
        elif self.exit_code == 1:
            symbol, paint = red(STEP_CANCEL), red
        else:
            symbol, paint = red(STEP_ERROR), red
        lines = [
            gray(BAR),
            f"{symbol}  {self.label}",
            f"{gray(BAR)}  {self._bar(paint)}",
        ]
        if self.hint:
            lines.append(f"{gray(BAR)}  {gray(self.hint)}")
        return lines
