"""Prompt engine: the generic run loop for interactive elements.

This module provides PromptEngine which:
- Opens the terminal session (unless one is supplied)
- Pumps decoded key events into the active element
- Redraws the element's frame after every event
- Races terminal input against an external cancellation token
- Ensures only one element is active at a time
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, TypeVar

from ..cancellation import CancellationToken
from ..config import Settings
from ..errors import SessionClosedError
from ..result import CANCELED, PromptResult, Submitted
from .base import ActiveElement, PromptState
from .keys import ESCAPE_TIMEOUT, KeyDecoder
from .renderer import Renderer
from .terminal import TerminalSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys that end any prompt regardless of its own handling
CANCEL_KEYS = frozenset({"Escape", "Interrupt"})


class Session(Protocol):
    """What the engine needs from a terminal session."""

    @property
    def is_open(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    async def read_async(self) -> bytes: ...

    def write(self, text: str, /) -> None: ...

    def flush(self) -> None: ...

    def size(self) -> tuple[int, int]: ...


class PromptEngine:
    """Runs one element at a time against a terminal session.

    Args:
        session: Session to use. When omitted a TerminalSession is opened for
            each run and closed afterwards; a supplied session is opened if
            needed but left to the caller to close.
        cancel_token: External cancellation signal, checked before every
            event and raced against every read. When both are ready the
            token wins.
        settings: Passed to the key decoder.

    The result is always a PromptResult. Escape, Ctrl+C, end of input and
    a closed session all resolve to CANCELED.
    """

    def __init__(
        self,
        session: Session | None = None,
        cancel_token: CancellationToken | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._session = session
        self.cancel_token = cancel_token
        self._settings = settings
        self._active: ActiveElement[object] | None = None

    def _cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.is_cancelled

    async def run(self, element: ActiveElement[T]) -> PromptResult[T]:
        """Run an element until it is submitted or cancelled."""
        if self._active is not None:
            raise RuntimeError("Another element is already active")
        if self._cancelled():
            return CANCELED

        session: Session = self._session if self._session is not None else TerminalSession()
        opened_here = False
        if not session.is_open:
            session.open()
            opened_here = True

        self._active = element
        renderer = Renderer(session, width=lambda: session.size()[0])
        decoder = KeyDecoder(vi_keys=element.vi_keys, settings=self._settings)
        element.on_activate()

        result: PromptResult[T] = CANCELED
        try:
            result = await self._loop(element, session, renderer, decoder)
        finally:
            if isinstance(result, Submitted):
                element.state = PromptState.SUBMITTED
            else:
                element.state = PromptState.CANCELED
            try:
                renderer.render(element.get_lines())
                renderer.finish()
            finally:
                if opened_here:
                    session.close()
                element.on_deactivate()
                self._active = None
        logger.debug("%s finished: %r", type(element).__name__, result)
        return result

    async def _loop(
        self,
        element: ActiveElement[T],
        session: Session,
        renderer: Renderer,
        decoder: KeyDecoder,
    ) -> PromptResult[T]:
        renderer.render(element.get_lines())
        while True:
            timeout = ESCAPE_TIMEOUT if decoder.pending else None
            chunk = await self._next_chunk(session, timeout)
            if chunk is None:
                return CANCELED
            # An empty chunk means the wait for the rest of a sequence timed out
            events = decoder.feed(chunk) if chunk else decoder.flush()
            for event in events:
                if self._cancelled():
                    logger.debug("Cancellation token fired; cancelling prompt")
                    return CANCELED
                if event.key in CANCEL_KEYS:
                    return CANCELED
                outcome = element.handle_input(event)
                if outcome is not None:
                    return outcome
                renderer.render(element.get_lines())

    async def _next_chunk(self, session: Session, timeout: float | None = None) -> bytes | None:
        """Wait for input or cancellation.

        Returns the bytes read, b"" when ``timeout`` elapsed first, or None
        when the prompt must cancel.
        """
        token = self.cancel_token
        if token is not None and token.is_cancelled:
            return None
        if token is None and timeout is None:
            return await self._read(session)

        read_task = asyncio.create_task(self._read(session))
        waiting: set[asyncio.Task[Any]] = {read_task}
        cancel_task = None
        if token is not None:
            cancel_task = asyncio.create_task(token.wait())
            waiting.add(cancel_task)
        try:
            await asyncio.wait(waiting, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in waiting:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*waiting, return_exceptions=True)

        if cancel_task is not None and cancel_task.done() and not cancel_task.cancelled():
            logger.debug("Cancellation token fired while waiting for input")
            return None
        if read_task.cancelled():
            return b""
        return read_task.result()

    async def _read(self, session: Session) -> bytes | None:
        try:
            data = await session.read_async()
        except SessionClosedError:
            logger.debug("Session closed while reading; cancelling prompt")
            return None
        if not data:
            logger.debug("End of input; cancelling prompt")
            return None
        return data
