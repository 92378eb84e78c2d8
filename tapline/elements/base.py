"""Base types shared by interactive elements.

This module provides:
- InputEvent: One decoded keystroke (or paste)
- PromptState: Lifecycle of a prompt inside the engine
- ActiveElement: Base class for key-driven prompt state machines
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

from ..result import PromptResult

T = TypeVar("T")


@dataclass(frozen=True)
class InputEvent:
    """A single decoded key event.

    ``key`` is either a named key ("Enter", "Up", "Backspace", "Interrupt",
    "Paste", ...) or, for printable input, the character itself. ``char`` holds
    the text the key produces (pasted text for "Paste"), or None for keys that
    produce none.
    """

    key: str
    char: str | None = None
    ctrl: bool = False


class PromptState(Enum):
    """Prompt lifecycle.

    Valid transitions:
        ACTIVE ──Enter (accepted)──> SUBMITTED
        ACTIVE ──Escape/Ctrl+C/EOF/token──> CANCELED
    """

    ACTIVE = auto()
    SUBMITTED = auto()
    CANCELED = auto()


class ActiveElement(ABC, Generic[T]):
    """A prompt state machine driven by PromptEngine.

    Subclasses produce a frame from their state with ``get_lines()`` and react
    to keys in ``handle_input()``. Escape and Ctrl+C never reach
    ``handle_input``; the engine cancels on them directly.
    """

    # When True the decoder maps h/j/k/l to Left/Down/Up/Right.
    vi_keys: bool = False

    state: PromptState = PromptState.ACTIVE

    @abstractmethod
    def get_lines(self) -> list[str]:
        """Render the current state as a fresh list of lines."""

    @abstractmethod
    def handle_input(self, event: InputEvent) -> PromptResult[T] | None:
        """Apply one event.

        Returns None to stay active, or the result that ends the prompt.
        """

    def on_activate(self) -> None:
        """Called once before the first frame."""
        self.state = PromptState.ACTIVE

    def on_deactivate(self) -> None:
        """Called once after the final frame."""
