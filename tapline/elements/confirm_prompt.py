"""Yes/no confirmation element."""

from __future__ import annotations

from dataclasses import dataclass

from ..result import PromptResult, Submitted
from .base import ActiveElement, InputEvent, PromptState
from .symbols import (
    BAR,
    BAR_END,
    RADIO_ACTIVE,
    RADIO_INACTIVE,
    cyan,
    dim,
    gray,
    green,
    strikethrough,
    title_lines,
)

_FLIP_KEYS = frozenset({"Left", "Right", "Tab"})


@dataclass
class ConfirmPrompt(ActiveElement[bool]):
    """Boolean choice between two labels.

    Left/Right/Tab (or h/l) flip the choice, Enter submits it, and y/n submit
    True/False directly.
    """

    message: str = ""
    active: str = "Yes"
    inactive: str = "No"
    value: bool = True

    vi_keys = True

    def _label(self) -> str:
        return self.active if self.value else self.inactive

    def get_lines(self) -> list[str]:
        lines = title_lines(self.message, self.state)
        if self.state is PromptState.SUBMITTED:
            lines.append(f"{gray(BAR)}  {dim(self._label())}")
            return lines
        if self.state is PromptState.CANCELED:
            lines.append(f"{gray(BAR)}  {strikethrough(dim(self._label()))}")
            return lines

        if self.value:
            yes = f"{green(RADIO_ACTIVE)} {self.active}"
            no = f"{dim(RADIO_INACTIVE)} {dim(self.inactive)}"
        else:
            yes = f"{dim(RADIO_INACTIVE)} {dim(self.active)}"
            no = f"{green(RADIO_ACTIVE)} {self.inactive}"
        lines.append(f"{cyan(BAR)}  {yes} {dim('/')} {no}")
        lines.append(cyan(BAR_END))
        return lines

    def handle_input(self, event: InputEvent) -> PromptResult[bool] | None:
        if event.key == "Enter":
            return Submitted(self.value)
        if event.key in _FLIP_KEYS:
            self.value = not self.value
        elif event.char in ("y", "Y") and not event.ctrl:
            self.value = True
            return Submitted(True)
        elif event.char in ("n", "N") and not event.ctrl:
            self.value = False
            return Submitted(False)
        return None
