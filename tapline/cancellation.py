"""Cancellation token for cooperative prompt cancellation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field


@dataclass
class CancellationToken:
    """Token for cancelling an interactive prompt from outside its key loop.

    The prompt engine checks the token before dispatching every key event and
    races it against the next terminal read, so a cancel propagates without
    waiting for a keypress.

    Usage:
        token = CancellationToken()
        token.cancel_after(30)  # give up after 30 seconds

        result = await multiselect("Pick", options, cancel_token=token)
        if is_cancel(result):
            ...

        # Or from another coroutine:
        token.cancel()

    The token must be cancelled from the event loop thread; use
    ``loop.call_soon_threadsafe(token.cancel)`` from other threads.
    """

    _event: asyncio.Event = field(default_factory=asyncio.Event)
    _timer: asyncio.TimerHandle | None = field(default=None, init=False)

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    def cancel_after(self, delay: float) -> None:
        """Schedule ``cancel()`` after ``delay`` seconds on the running loop."""
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self.cancel)

    def reset(self) -> None:
        """Reset for reuse with a new prompt."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._event.clear()

    async def wait(self) -> None:
        """Block until cancellation is requested."""
        await self._event.wait()
