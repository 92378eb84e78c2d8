"""Single-line text input.

This module provides:
- TextInput: free text prompt with placeholder, default value and validation
- PasswordInput: TextInput that masks what is typed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import ValidationError
from ..result import PromptResult, Submitted
from .base import ActiveElement, InputEvent, PromptState
from .symbols import (
    BAR,
    BAR_END,
    PASSWORD_MASK,
    cyan,
    dim,
    gray,
    inverse,
    strikethrough,
    title_lines,
    yellow,
)

Validator = Callable[[str], Optional[str]]


@dataclass
class TextInput(ActiveElement[str]):
    """Single-line text prompt.

    Editing keys: printable characters insert at the cursor, Backspace and
    Delete remove around it, Left/Right/Home/End move it, Ctrl+A/E/U/K/W
    behave as in a shell. Enter submits the buffer, or ``default_value`` when
    the buffer is empty.

    ``validate`` receives the value about to be submitted and either returns
    an error message (or raises ValidationError) to keep the prompt open, or
    returns None to accept it.
    """

    message: str = ""
    placeholder: str = ""
    default_value: str = ""
    initial_value: str = ""
    validate: Validator | None = None

    def __post_init__(self) -> None:
        self.buffer = self.initial_value
        self.cursor_pos = len(self.buffer)
        self.error: str | None = None
        self.submitted_value = ""

    def _display(self, text: str) -> str:
        """How buffer text is shown; PasswordInput masks it."""
        return text

    def _insert_text(self, text: str) -> None:
        self.buffer = self.buffer[: self.cursor_pos] + text + self.buffer[self.cursor_pos :]
        self.cursor_pos += len(text)

    def _normalize_paste(self, text: str) -> str:
        """Flatten pasted text onto one line and drop control characters."""
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        normalized = normalized.replace("\n", " ").replace("\t", " ")
        # ESC and friends would otherwise be written to the terminal verbatim
        return "".join(ch for ch in normalized if ch.isprintable())

    def _delete_before_cursor(self) -> None:
        if self.cursor_pos > 0:
            self.buffer = self.buffer[: self.cursor_pos - 1] + self.buffer[self.cursor_pos :]
            self.cursor_pos -= 1

    def _delete_at_cursor(self) -> None:
        if self.cursor_pos < len(self.buffer):
            self.buffer = self.buffer[: self.cursor_pos] + self.buffer[self.cursor_pos + 1 :]

    def _delete_prev_word(self) -> None:
        i = self.cursor_pos
        while i > 0 and self.buffer[i - 1].isspace():
            i -= 1
        while i > 0 and not self.buffer[i - 1].isspace():
            i -= 1
        self.buffer = self.buffer[:i] + self.buffer[self.cursor_pos :]
        self.cursor_pos = i

    def _run_validation(self, value: str) -> str | None:
        if self.validate is None:
            return None
        try:
            return self.validate(value)
        except ValidationError as exc:
            return exc.message

    def _render_buffer_with_cursor(self) -> str:
        """Return buffer with the cursor cell shown in reverse video."""
        shown = self._display(self.buffer)
        if not shown and self.placeholder:
            return inverse(self.placeholder[0]) + dim(self.placeholder[1:])
        if self.cursor_pos < len(shown):
            return (
                shown[: self.cursor_pos]
                + inverse(shown[self.cursor_pos])
                + shown[self.cursor_pos + 1 :]
            )
        return shown + inverse(" ")

    def get_lines(self) -> list[str]:
        lines = title_lines(self.message, self.state, error=self.error is not None)
        if self.state is PromptState.SUBMITTED:
            value = self._display(self.submitted_value)
            lines.append(gray(BAR) + (f"  {dim(value)}" if value else ""))
            return lines
        if self.state is PromptState.CANCELED:
            value = self._display(self.buffer)
            lines.append(gray(BAR) + (f"  {strikethrough(dim(value))}" if value.strip() else ""))
            return lines

        display = self._render_buffer_with_cursor()
        if self.error is not None:
            lines.append(f"{yellow(BAR)}  {display}")
            lines.append(f"{yellow(BAR_END)}  {yellow(self.error)}")
        else:
            lines.append(f"{cyan(BAR)}  {display}")
            lines.append(cyan(BAR_END))
        return lines

    def handle_input(self, event: InputEvent) -> PromptResult[str] | None:
        if event.key == "Enter":
            value = self.buffer if self.buffer else self.default_value
            self.error = self._run_validation(value)
            if self.error is not None:
                return None
            self.submitted_value = value
            return Submitted(value)

        # Any other key dismisses a validation error
        self.error = None

        if event.key == "Paste" and event.char:
            self._insert_text(self._normalize_paste(event.char))
        elif event.key == "Backspace":
            self._delete_before_cursor()
        elif event.key == "Delete":
            self._delete_at_cursor()
        elif event.key == "Left" or (event.ctrl and event.char == "b"):
            self.cursor_pos = max(0, self.cursor_pos - 1)
        elif event.key == "Right" or (event.ctrl and event.char == "f"):
            self.cursor_pos = min(len(self.buffer), self.cursor_pos + 1)
        elif event.key == "Home" or (event.ctrl and event.char == "a"):
            self.cursor_pos = 0
        elif event.key == "End" or (event.ctrl and event.char == "e"):
            self.cursor_pos = len(self.buffer)
        elif event.ctrl and event.char == "u":
            self.buffer = self.buffer[self.cursor_pos :]
            self.cursor_pos = 0
        elif event.ctrl and event.char == "k":
            self.buffer = self.buffer[: self.cursor_pos]
        elif event.ctrl and event.char == "w":
            self._delete_prev_word()
        elif not event.ctrl and event.char and event.key not in ("Paste", "Tab"):
            # Printable characters and Space
            self._insert_text(event.char)
        return None


@dataclass
class PasswordInput(TextInput):
    """Text prompt that never shows the typed characters."""

    mask: str = PASSWORD_MASK

    def _display(self, text: str) -> str:
        return self.mask * len(text)
