"""Tagged prompt results.

Every prompt resolves to either ``Submitted(value)`` or ``CANCELED``. The value
is never returned bare, so an empty string, ``0``, ``False`` or ``None`` are all
legitimate submissions that cannot be confused with a cancel.

Usage:
    result = await select("Pick one", options)
    if is_cancel(result):
        return
    print(result.value)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Submitted(Generic[T]):
    """The prompt was submitted with ``value``."""

    value: T


class Canceled:
    """The prompt was aborted (Escape, Ctrl+C, closed input or external signal)."""

    _instance: Canceled | None = None

    def __new__(cls) -> Canceled:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCELED"


CANCELED = Canceled()

PromptResult = Union[Submitted[T], Canceled]


def is_cancel(result: Any) -> bool:
    """Return True iff ``result`` is the cancel outcome."""
    return isinstance(result, Canceled)
