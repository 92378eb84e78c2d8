"""High-level prompt coroutines.

Each helper builds an element, runs it through a PromptEngine and returns a
PromptResult. A terminal session is opened for the duration of the call
unless ``session`` is given.

Usage:
    result = await select(
        "Pick a language",
        [Option("py", "Python"), Option("go", "Go", hint="fast builds")],
    )
    if is_cancel(result):
        cancel("Aborted")
        return
    print(result.value)
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from .cancellation import CancellationToken
from .elements.autocomplete import Autocomplete, Suggester
from .elements.confirm_prompt import ConfirmPrompt
from .elements.manager import PromptEngine, Session
from .elements.menu_select import UNSET, MultiSelect, Option, Select
from .elements.text_input import PasswordInput, TextInput, Validator
from .result import PromptResult

T = TypeVar("T")


def _as_options(options: Iterable[Option[T] | T]) -> list[Option[T]]:
    """Accept bare values alongside Option instances."""
    return [opt if isinstance(opt, Option) else Option(opt) for opt in options]


def _engine(session: Session | None, cancel_token: CancellationToken | None) -> PromptEngine:
    return PromptEngine(session=session, cancel_token=cancel_token)


async def text(
    message: str,
    *,
    placeholder: str = "",
    default_value: str = "",
    initial_value: str = "",
    validate: Validator | None = None,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[str]:
    """Ask for a line of text."""
    element = TextInput(
        message=message,
        placeholder=placeholder,
        default_value=default_value,
        initial_value=initial_value,
        validate=validate,
    )
    return await _engine(session, cancel_token).run(element)


async def password(
    message: str,
    *,
    default_value: str = "",
    initial_value: str = "",
    validate: Validator | None = None,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[str]:
    """Ask for a secret; input is masked on screen."""
    element = PasswordInput(
        message=message,
        default_value=default_value,
        initial_value=initial_value,
        validate=validate,
    )
    return await _engine(session, cancel_token).run(element)


async def autocomplete(
    message: str,
    suggest: Suggester,
    *,
    placeholder: str = "",
    default_value: str = "",
    initial_value: str = "",
    max_results: int = 5,
    validate: Validator | None = None,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[str]:
    """Ask for a line of text, listing ``suggest(buffer)`` below the input.

    Tab copies the highlighted suggestion into the input; Enter submits what
    is typed.
    """
    element = Autocomplete(
        message=message,
        placeholder=placeholder,
        default_value=default_value,
        initial_value=initial_value,
        validate=validate,
        suggest=suggest,
        max_results=max_results,
    )
    return await _engine(session, cancel_token).run(element)


async def select(
    message: str,
    options: Iterable[Option[T] | T],
    *,
    initial_value: Any = UNSET,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[T]:
    """Ask for exactly one of ``options``; ``initial_value`` may be None."""
    element: Select[T] = Select(
        message=message, options=_as_options(options), initial_value=initial_value
    )
    return await _engine(session, cancel_token).run(element)


async def multiselect(
    message: str,
    options: Iterable[Option[T] | T],
    *,
    initial_values: Iterable[T] = (),
    max_items: int | None = None,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[list[T]]:
    """Ask for any number of ``options``; values come back in option order."""
    element: MultiSelect[T] = MultiSelect(
        message=message,
        options=_as_options(options),
        initial_values=initial_values,
        max_items=max_items,
    )
    return await _engine(session, cancel_token).run(element)


async def confirm(
    message: str,
    *,
    active: str = "Yes",
    inactive: str = "No",
    initial_value: bool = True,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
) -> PromptResult[bool]:
    """Ask a yes/no question."""
    element = ConfirmPrompt(
        message=message, active=active, inactive=inactive, value=initial_value
    )
    return await _engine(session, cancel_token).run(element)


__all__ = ["text", "password", "autocomplete", "select", "multiselect", "confirm"]
