"""Exceptions raised by the prompt runtime.

Submitting and cancelling a prompt are not errors; they are reported through
``PromptResult``. The classes here cover the terminal itself and user-supplied
validation callbacks.
"""

from __future__ import annotations


class TerminalError(Exception):
    """Base class for terminal acquisition and I/O failures."""


class NotATTYError(TerminalError):
    """Standard input or output is not an interactive terminal.

    Raised by ``TerminalSession.open()``. Prompts do not retry; callers that
    may run without a terminal (CI, piped input) should catch this and fall
    back to non-interactive behaviour.
    """

    def __init__(self, stream: str = "stdin") -> None:
        self.stream = stream
        super().__init__(f"{stream} is not an interactive terminal")


class AlreadyOpenError(TerminalError):
    """A second session was opened while another one still owns the terminal."""

    def __init__(self) -> None:
        super().__init__("Another terminal session is already open")


class SessionClosedError(TerminalError):
    """Read attempted on (or interrupted by) a closed session."""

    def __init__(self) -> None:
        super().__init__("Terminal session is closed")


class ValidationError(Exception):
    """Raised by a ``validate`` callback to reject the submitted value.

    Example:
        >>> def validate(value: str) -> None:
        ...     if not value.isdigit():
        ...         raise ValidationError("Please enter a number")
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
