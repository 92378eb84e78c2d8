"""Diff-based region renderer.

Renderer owns the rows below the cursor position where it was created and
redraws them in place. Only rows whose text changed are rewritten, so the
bytes written per keystroke are proportional to what changed, not to the size
of the prompt.

Uses explicit cursor movement (cursor_up/cursor_down) instead of save/restore
sequences, which are more reliable across different terminals.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from .terminal import ANSI


class Output(Protocol):
    def write(self, text: str, /) -> object: ...

    def flush(self) -> None: ...


class Renderer:
    """Redraws a frame (list of lines) in place, rewriting only changed rows.

    Args:
        output: Text stream or TerminalSession to write to.
        width: Callable returning the terminal width; lines wider than the
            terminal are truncated so they never soft-wrap and break row
            accounting.
    """

    def __init__(self, output: Output, width: Callable[[], int] | None = None) -> None:
        self.output = output
        self._width = width or ANSI.terminal_width
        self.previous: list[str] = []
        self.lines_written = 0
        self._row = 0  # Row the cursor is on (0 = top of region)
        self._height = 1  # Rows that exist on screen below the region start
        self._started = False

    def _write(self, s: str) -> None:
        self.output.write(s)

    def _move_to(self, target: int) -> None:
        """Move the cursor to column 1 of ``target``, scrolling in new rows."""
        if target < self._row:
            self._write(ANSI.cursor_up(self._row - target))
        elif target > self._row:
            last_existing = self._height - 1
            if self._row < last_existing:
                self._write(ANSI.cursor_down(min(target, last_existing) - self._row))
            new_rows = target - max(self._row, last_existing)
            if new_rows > 0:
                # Newlines scroll the screen when at the bottom; cursor_down does not
                self._write("\n" * new_rows)
                self._height = target + 1
        self._write(ANSI.CARRIAGE_RETURN)
        self._row = target

    def _fit(self, line: str, width: int) -> str:
        if ANSI.visual_len(line) > width:
            return ANSI.truncate_to_width(line, width)
        return line

    def render(self, frame: Sequence[str]) -> None:
        """Draw ``frame``, touching only rows that differ from the last one."""
        width = max(1, self._width())
        lines = [self._fit(line, width) for line in frame]
        previous = self.previous

        wrote = False
        if not self._started:
            self._write(ANSI.HIDE_CURSOR)
            self._started = True
            wrote = True

        for i in range(max(len(lines), len(previous))):
            if i < len(lines):
                if i < len(previous) and lines[i] == previous[i]:
                    continue
                self._move_to(i)
                self._write(lines[i])
                # When a line exactly fills the terminal the cursor may sit in
                # the pending-wrap column, where CLEAR_TO_END would erase the
                # last cell; the full-width line leaves nothing to clear anyway.
                if ANSI.visual_len(lines[i]) < width:
                    self._write(ANSI.CLEAR_TO_END)
            else:
                self._move_to(i)
                self._write(ANSI.CLEAR_LINE)
            self.lines_written += 1
            wrote = True

        self.previous = lines
        if wrote:
            self.output.flush()

    def finish(self) -> None:
        """Leave the final frame in scroll-back and park the cursor below it.

        The Renderer is reset and can draw a new region afterwards.
        """
        if self._started:
            self._move_to(len(self.previous))
            self._write(ANSI.SHOW_CURSOR)
            self.output.flush()
        self.previous = []
        self._row = 0
        self._height = 1
        self._started = False
