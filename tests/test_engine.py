"""Tests for PromptEngine in tapline/elements/manager.py.

Covers:
- End-to-end scenarios for each prompt type
- Escape / Ctrl+C / end of input cancellation
- External cancellation token (before start, while waiting, mid-chunk)
- Session ownership and terminal restoration
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from tapline.cancellation import CancellationToken
from tapline.config import Settings
from tapline.elements.autocomplete import Autocomplete
from tapline.elements.base import ActiveElement, InputEvent, PromptState
from tapline.elements.confirm_prompt import ConfirmPrompt
from tapline.elements.manager import PromptEngine
from tapline.elements.menu_select import MultiSelect, Option, Select
from tapline.elements.text_input import PasswordInput, TextInput
from tapline.result import CANCELED, PromptResult, Submitted, is_cancel

DOWN = b"\x1b[B"
ENTER = b"\r"
SPACE = b" "
ESC = b"\x1b"
CTRL_C = b"\x03"


def make_select() -> Select[str]:
    return Select(message="Pick", options=[Option("a"), Option("b"), Option("c")])


def make_multiselect() -> MultiSelect[str]:
    return MultiSelect(message="Pick", options=[Option("x"), Option("y"), Option("z")])


ELEMENT_FACTORIES = [
    pytest.param(lambda: TextInput(message="Name"), id="text"),
    pytest.param(lambda: PasswordInput(message="Secret"), id="password"),
    pytest.param(make_select, id="select"),
    pytest.param(make_multiselect, id="multiselect"),
    pytest.param(lambda: ConfirmPrompt(message="Sure?"), id="confirm"),
]


class CancelOnFirstKey(ActiveElement[str]):
    """Element that fires a token from inside its own key handler."""

    def __init__(self, token: CancellationToken) -> None:
        self.token = token
        self.seen: list[str] = []

    def get_lines(self) -> list[str]:
        return ["cancel-on-first-key"]

    def handle_input(self, event: InputEvent) -> PromptResult[str] | None:
        self.seen.append(event.key)
        self.token.cancel()
        return None


class TestScenarios:
    """Key sequences from the prompt behaviour table."""

    @pytest.mark.asyncio
    async def test_select_down_down_enter(self, make_session: Any, settings: Settings) -> None:
        session = make_session([DOWN, DOWN, ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert result == Submitted("c")

    @pytest.mark.asyncio
    async def test_select_keys_in_one_chunk(self, make_session: Any, settings: Settings) -> None:
        session = make_session([DOWN + DOWN + ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert result == Submitted("c")

    @pytest.mark.asyncio
    async def test_arrow_split_across_reads(self, make_session: Any, settings: Settings) -> None:
        session = make_session([ESC, b"[B", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert result == Submitted("b")

    @pytest.mark.asyncio
    async def test_arrow_split_after_escape_byte_and_bracket(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([DOWN[:2], DOWN[2:], ESC, b"[", b"B", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert result == Submitted("c")

    @pytest.mark.asyncio
    async def test_arrow_split_with_cancel_token(
        self, make_session: Any, settings: Settings
    ) -> None:
        token = CancellationToken()
        session = make_session([ESC, b"[B", ENTER])
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)
        assert await engine.run(make_select()) == Submitted("b")

    @pytest.mark.asyncio
    async def test_select_vi_keys(self, make_session: Any, settings: Settings) -> None:
        session = make_session([b"j", b"j", b"k", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert result == Submitted("b")

    @pytest.mark.asyncio
    async def test_multiselect_select_all(self, make_session: Any, settings: Settings) -> None:
        session = make_session([SPACE, DOWN, SPACE, DOWN, SPACE, ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_multiselect())
        assert result == Submitted(["x", "y", "z"])

    @pytest.mark.asyncio
    async def test_multiselect_with_preselection(
        self, make_session: Any, settings: Settings
    ) -> None:
        """Initial {y}, then Space, Down, Down, Space, Enter selects everything."""
        element = MultiSelect(
            message="Pick",
            options=[Option("x"), Option("y"), Option("z")],
            initial_values=["y"],
        )
        session = make_session([SPACE, DOWN, DOWN, SPACE, ENTER])
        result = await PromptEngine(session=session, settings=settings).run(element)
        assert result == Submitted(["x", "y", "z"])

    @pytest.mark.asyncio
    async def test_multiselect_nothing_selected(self, make_session: Any, settings: Settings) -> None:
        session = make_session([ENTER])
        result = await PromptEngine(session=session, settings=settings).run(make_multiselect())
        assert result == Submitted([])

    @pytest.mark.asyncio
    async def test_confirm_enter_submits_default(self, make_session: Any, settings: Settings) -> None:
        session = make_session([ENTER])
        result = await PromptEngine(session=session, settings=settings).run(
            ConfirmPrompt(message="Sure?")
        )
        assert result == Submitted(True)

    @pytest.mark.asyncio
    async def test_autocomplete_tab_then_enter(
        self, make_session: Any, settings: Settings
    ) -> None:
        element = Autocomplete(
            message="Region",
            suggest=lambda text: [r for r in ("eu-west", "us-east", "us-west") if text in r],
        )
        session = make_session([b"us", DOWN, b"\t", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(element)
        assert result == Submitted("us-west")
        assert element.state is PromptState.SUBMITTED

    @pytest.mark.asyncio
    async def test_text_typing(self, make_session: Any, settings: Settings) -> None:
        session = make_session([b"h", b"i", b"\x7f", b"o", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(
            TextInput(message="Name")
        )
        assert result == Submitted("ho")

    @pytest.mark.asyncio
    async def test_text_empty_submit_uses_default(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([ENTER])
        result = await PromptEngine(session=session, settings=settings).run(
            TextInput(message="Name", default_value="anon")
        )
        assert result == Submitted("anon")

    @pytest.mark.asyncio
    async def test_text_paste(self, make_session: Any, settings: Settings) -> None:
        session = make_session([b"\x1b[200~one\ntwo\x1b[201~", ENTER])
        result = await PromptEngine(session=session, settings=settings).run(
            TextInput(message="Name")
        )
        assert result == Submitted("one two")

    @pytest.mark.asyncio
    async def test_text_validation_keeps_prompt_open(
        self, make_session: Any, settings: Settings
    ) -> None:
        def validate(value: str) -> str | None:
            return None if value.isdigit() else "Numbers only"

        session = make_session([b"a", ENTER, b"\x7f", b"4", b"2", ENTER])
        element = TextInput(message="Age", validate=validate)
        result = await PromptEngine(session=session, settings=settings).run(element)
        assert result == Submitted("42")
        assert "Numbers only" in session.text


class TestCancellation:
    """Every way a prompt can end without a submission."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("factory", ELEMENT_FACTORIES)
    @pytest.mark.parametrize("key", [ESC, CTRL_C], ids=["escape", "ctrl-c"])
    async def test_cancel_keys(
        self, factory: Any, key: bytes, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([key], hang=True)
        element = factory()
        engine = PromptEngine(session=session, settings=settings)
        result = await asyncio.wait_for(engine.run(element), timeout=2)
        assert result is CANCELED
        assert element.state is PromptState.CANCELED

    @pytest.mark.asyncio
    async def test_end_of_input_cancels(self, make_session: Any, settings: Settings) -> None:
        session = make_session([DOWN])
        result = await PromptEngine(session=session, settings=settings).run(make_select())
        assert is_cancel(result)
        assert session.close_calls == 1

    @pytest.mark.asyncio
    async def test_token_cancelled_before_start(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([ENTER])
        token = CancellationToken()
        token.cancel()
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)
        result = await engine.run(make_select())
        assert result is CANCELED
        assert session.open_calls == 0
        assert session.text == ""

    @pytest.mark.asyncio
    async def test_token_cancels_blocked_read(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session(hang=True)
        token = CancellationToken()
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)

        async def cancel_soon() -> None:
            await asyncio.sleep(0.01)
            token.cancel()

        canceller = asyncio.create_task(cancel_soon())
        result = await asyncio.wait_for(engine.run(make_multiselect()), timeout=2)
        await canceller
        assert result is CANCELED
        assert session.close_calls == 1
        assert "■" in session.text

    @pytest.mark.asyncio
    async def test_cancel_after_deadline(self, make_session: Any, settings: Settings) -> None:
        session = make_session(hang=True)
        token = CancellationToken()
        token.cancel_after(0.01)
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)
        result = await asyncio.wait_for(engine.run(TextInput(message="Name")), timeout=2)
        assert result is CANCELED

    @pytest.mark.asyncio
    async def test_token_checked_before_each_queued_event(
        self, make_session: Any, settings: Settings
    ) -> None:
        token = CancellationToken()
        element = CancelOnFirstKey(token)
        session = make_session([b"ab" + ENTER])
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)
        result = await engine.run(element)
        assert result is CANCELED
        assert element.seen == ["a"]

    @pytest.mark.asyncio
    async def test_token_wins_over_data_read_at_same_time(self, settings: Settings) -> None:
        token = CancellationToken()

        class RacingSession:
            is_open = True
            written: list[str] = []

            def open(self) -> None:
                pass

            def close(self) -> None:
                pass

            async def read_async(self) -> bytes:
                token.cancel()
                return ENTER

            def write(self, text: str) -> None:
                self.written.append(text)

            def flush(self) -> None:
                pass

            def size(self) -> tuple[int, int]:
                return (80, 24)

        engine = PromptEngine(session=RacingSession(), cancel_token=token, settings=settings)
        result = await engine.run(ConfirmPrompt(message="Sure?"))
        assert result is CANCELED

    @pytest.mark.asyncio
    async def test_task_cancellation_propagates_after_restore(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session(hang=True)
        element = make_select()
        task = asyncio.create_task(PromptEngine(session=session, settings=settings).run(element))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert session.close_calls == 1
        assert element.state is PromptState.CANCELED


class TestSessionHandling:
    """Session open/close ownership and final frame."""

    @pytest.mark.asyncio
    async def test_engine_opens_and_closes_session(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([ENTER])
        await PromptEngine(session=session, settings=settings).run(make_select())
        assert session.open_calls == 1
        assert session.close_calls == 1

    @pytest.mark.asyncio
    async def test_already_open_session_left_open(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([ENTER, ENTER])
        session.open()
        engine = PromptEngine(session=session, settings=settings)
        first = await engine.run(make_select())
        second = await engine.run(ConfirmPrompt(message="Again?"))
        assert first == Submitted("a")
        assert second == Submitted(True)
        assert session.close_calls == 0
        assert session.is_open

    @pytest.mark.asyncio
    async def test_final_frame_shows_submitted_marker(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([DOWN, ENTER])
        element = make_select()
        await PromptEngine(session=session, settings=settings).run(element)
        assert element.state is PromptState.SUBMITTED
        assert "◇" in session.text
        assert session.text.rstrip().endswith("\x1b[?25h")

    @pytest.mark.asyncio
    async def test_one_element_at_a_time(self, make_session: Any, settings: Settings) -> None:
        session = make_session(hang=True)
        token = CancellationToken()
        engine = PromptEngine(session=session, cancel_token=token, settings=settings)
        first = asyncio.create_task(engine.run(make_select()))
        await asyncio.sleep(0.01)
        with pytest.raises(RuntimeError):
            await engine.run(ConfirmPrompt(message="Second"))
        token.cancel()
        assert await first is CANCELED

    @pytest.mark.asyncio
    async def test_engine_reusable_after_cancel(
        self, make_session: Any, settings: Settings
    ) -> None:
        session = make_session([CTRL_C, ENTER])
        engine = PromptEngine(session=session, settings=settings)
        assert await engine.run(make_select()) is CANCELED
        assert await engine.run(make_select()) == Submitted("a")
