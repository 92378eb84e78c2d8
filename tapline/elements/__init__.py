"""Interactive terminal elements.

This package provides the runtime behind every prompt: the raw-mode terminal
session, the key decoder, the diff renderer, the prompt engine and the
individual prompt state machines.

Usage:
    from tapline.elements import PromptEngine, Select, Option

    result = await PromptEngine().run(
        Select(message="Pick", options=[Option("a"), Option("b")])
    )
"""

from .autocomplete import Autocomplete
from .base import ActiveElement, InputEvent, PromptState
from .confirm_prompt import ConfirmPrompt
from .keys import KeyDecoder
from .manager import PromptEngine
from .menu_select import MultiSelect, Option, Select
from .progress import Progress
from .renderer import Renderer
from .terminal import ANSI, TerminalSession
from .text_input import PasswordInput, TextInput

__all__ = [
    # Base
    "ActiveElement",
    "InputEvent",
    "PromptState",
    # Runtime
    "PromptEngine",
    "KeyDecoder",
    "Renderer",
    "TerminalSession",
    "ANSI",
    # Elements
    "TextInput",
    "PasswordInput",
    "Autocomplete",
    "Select",
    "MultiSelect",
    "Option",
    "ConfirmPrompt",
    "Progress",
]
