"""Menu selection elements.

Allows the user to select from a list of options using arrow keys or h/j/k/l.
- Select: Enter submits the highlighted option's value.
- MultiSelect: Space toggles, Enter submits the selected values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Sequence, TypeVar

from ..result import PromptResult, Submitted
from .base import ActiveElement, InputEvent, PromptState
from .symbols import (
    BAR,
    BAR_END,
    CHECKBOX_CHECKED,
    CHECKBOX_UNCHECKED,
    RADIO_ACTIVE,
    RADIO_INACTIVE,
    cyan,
    dim,
    gray,
    green,
    strikethrough,
    title_lines,
)

T = TypeVar("T")
R = TypeVar("R")

_PREVIOUS_KEYS = frozenset({"Up", "Left"})
_NEXT_KEYS = frozenset({"Down", "Right"})

# Default for Select.initial_value, so that None can be preselected.
UNSET: Any = object()


@dataclass(frozen=True)
class Option(Generic[T]):
    """One selectable choice. ``label`` defaults to ``str(value)``."""

    value: T
    label: str | None = None
    hint: str | None = None

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else str(self.value)


def _hint_suffix(option: Option[T]) -> str:
    return f" {dim(f'({option.hint})')}" if option.hint else ""


@dataclass
class _MenuBase(ActiveElement[R], Generic[T, R]):
    """Shared option list and wrap-around navigation; R is the submitted type."""

    message: str = ""
    options: Sequence[Option[T]] = field(default_factory=tuple)
    cursor: int = 0

    vi_keys = True

    def __post_init__(self) -> None:
        self.options = tuple(self.options)
        if not self.options:
            raise ValueError(f"{type(self).__name__} needs at least one option")
        if not 0 <= self.cursor < len(self.options):
            raise ValueError(
                f"cursor {self.cursor} out of range for {len(self.options)} options"
            )

    def _move(self, event: InputEvent) -> bool:
        """Wrap-around cursor movement. Returns True if the event was a move."""
        n = len(self.options)
        if event.key in _PREVIOUS_KEYS:
            self.cursor = (self.cursor - 1 + n) % n
            return True
        if event.key in _NEXT_KEYS:
            self.cursor = (self.cursor + 1) % n
            return True
        return False

    def _body(self, rows: list[str]) -> list[str]:
        """Prefix active option rows with the bar and close the region."""
        return [f"{cyan(BAR)}  {row}" for row in rows] + [cyan(BAR_END)]


@dataclass
class Select(_MenuBase[T, T]):
    """Single choice from a list.

    ``initial_value`` places the cursor on the first option whose value
    equals it, None included; an unmatched value is ignored.
    """

    initial_value: Any = UNSET

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.initial_value is not UNSET:
            for i, option in enumerate(self.options):
                if option.value == self.initial_value:
                    self.cursor = i
                    break

    def get_lines(self) -> list[str]:
        lines = title_lines(self.message, self.state)
        current = self.options[self.cursor]
        if self.state is PromptState.SUBMITTED:
            lines.append(f"{gray(BAR)}  {dim(current.display_label)}")
            return lines
        if self.state is PromptState.CANCELED:
            lines.append(f"{gray(BAR)}  {strikethrough(dim(current.display_label))}")
            return lines

        rows = []
        for i, option in enumerate(self.options):
            if i == self.cursor:
                rows.append(f"{green(RADIO_ACTIVE)} {option.display_label}{_hint_suffix(option)}")
            else:
                rows.append(f"{dim(RADIO_INACTIVE)} {dim(option.display_label)}")
        return lines + self._body(rows)

    def handle_input(self, event: InputEvent) -> PromptResult[T] | None:
        if event.key == "Enter":
            return Submitted(self.options[self.cursor].value)
        self._move(event)
        return None


@dataclass
class MultiSelect(_MenuBase[T, list[T]]):
    """Any number of choices from a list.

    ``initial_values`` pre-selects every option whose value equals one of
    them. ``max_items`` caps the number of selected options: seeding stops
    at the cap and Space on an unselected option is ignored there. The
    submitted list follows option order, not the order options were
    toggled in.
    """

    initial_values: Iterable[T] = ()
    max_items: int | None = None
    selected: set[int] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        initial = list(self.initial_values)
        for i, option in enumerate(self.options):
            if any(option.value == value for value in initial):
                self.toggle(i)

    def toggle(self, index: int) -> None:
        if index in self.selected:
            self.selected.remove(index)
        elif self.max_items is None or len(self.selected) < self.max_items:
            self.selected.add(index)

    def values(self) -> list[T]:
        return [option.value for i, option in enumerate(self.options) if i in self.selected]

    def _count_text(self) -> str:
        if self.max_items is not None:
            return f" {dim(f'({len(self.selected)}/{self.max_items})')}"
        if self.selected:
            return f" {dim(f'({len(self.selected)})')}"
        return ""

    def get_lines(self) -> list[str]:
        lines = title_lines(self.message + self._count_text(), self.state)
        labels = ", ".join(
            option.display_label for i, option in enumerate(self.options) if i in self.selected
        )
        if self.state is PromptState.SUBMITTED:
            lines.append(gray(BAR) + (f"  {dim(labels)}" if labels else ""))
            return lines
        if self.state is PromptState.CANCELED:
            lines.append(gray(BAR) + (f"  {strikethrough(dim(labels))}" if labels else ""))
            return lines

        rows = []
        for i, option in enumerate(self.options):
            checked = i in self.selected
            box = CHECKBOX_CHECKED if checked else CHECKBOX_UNCHECKED
            label = option.display_label if checked else dim(option.display_label)
            if i == self.cursor:
                # Cursor highlight is the label color; the box shows selection
                marker = green(box) if checked else cyan(box)
                rows.append(f"{marker} {cyan(option.display_label)}{_hint_suffix(option)}")
            elif checked:
                rows.append(f"{green(box)} {label}")
            else:
                rows.append(f"{dim(box)} {label}")
        return lines + self._body(rows)

    def handle_input(self, event: InputEvent) -> PromptResult[list[T]] | None:
        if event.key == "Enter":
            return Submitted(self.values())
        if event.key == "Space":
            self.toggle(self.cursor)
            return None
        self._move(event)
        return None
