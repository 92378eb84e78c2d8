"""Text input with a list of suggestions under the input row."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ..result import PromptResult
from .base import InputEvent, PromptState
from .symbols import BAR, BAR_END, RADIO_ACTIVE, RADIO_INACTIVE, cyan, dim, green
from .text_input import TextInput

Suggester = Callable[[str], Sequence[str]]

DEFAULT_MAX_RESULTS = 5


@dataclass
class Autocomplete(TextInput):
    """TextInput that offers completions for the current buffer.

    ``suggest`` is called with the buffer after every key and its first
    ``max_results`` entries are listed below the input. Up/Down move the
    highlight (wrapping around), Tab copies the highlighted suggestion into
    the buffer. Enter submits the buffer as typed, like TextInput.
    """

    suggest: Suggester | None = None
    max_results: int = DEFAULT_MAX_RESULTS

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.max_results <= 0:
            self.max_results = DEFAULT_MAX_RESULTS
        self.suggestions: list[str] = []
        self.selected = 0
        self._refresh_suggestions()

    def _refresh_suggestions(self) -> None:
        if self.suggest is None:
            self.suggestions = []
        else:
            self.suggestions = list(self.suggest(self.buffer))[: self.max_results]
        if self.selected >= len(self.suggestions):
            self.selected = 0

    def get_lines(self) -> list[str]:
        if self.state is not PromptState.ACTIVE or self.error is not None or not self.suggestions:
            return super().get_lines()
        lines = super().get_lines()[:-1]
        for i, suggestion in enumerate(self.suggestions):
            if i == self.selected:
                lines.append(f"{cyan(BAR)}  {green(RADIO_ACTIVE)} {suggestion}")
            else:
                lines.append(f"{cyan(BAR)}  {dim(RADIO_INACTIVE)} {dim(suggestion)}")
        lines.append(cyan(BAR_END))
        return lines

    def handle_input(self, event: InputEvent) -> PromptResult[str] | None:
        if event.key == "Enter":
            return super().handle_input(event)

        n = len(self.suggestions)
        if event.key == "Up" and n:
            self.selected = (self.selected - 1 + n) % n
            self.error = None
        elif event.key == "Down" and n:
            self.selected = (self.selected + 1) % n
            self.error = None
        elif event.key == "Tab" and n:
            self.buffer = self.suggestions[self.selected]
            self.cursor_pos = len(self.buffer)
            self.error = None
        else:
            super().handle_input(event)
        self._refresh_suggestions()
        return None
