"""Shared fixtures for tapline tests."""

from __future__ import annotations

import asyncio
import io
from typing import Iterable

import pytest

from tapline.config import Settings


class FakeSession:
    """In-memory stand-in for TerminalSession.

    Replays scripted byte chunks from ``read_async()``. Once the script is
    exhausted it reports end of input (b""), or blocks forever when ``hang``
    is set so cancellation paths can be exercised.
    """

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        hang: bool = False,
        size: tuple[int, int] = (80, 24),
    ) -> None:
        self.chunks = list(chunks)
        self.hang = hang
        self.output = io.StringIO()
        self.open_calls = 0
        self.close_calls = 0
        self.reads = 0
        self._is_open = False
        self._size = size

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        self.open_calls += 1
        self._is_open = True

    def close(self) -> None:
        self.close_calls += 1
        self._is_open = False

    async def read_async(self) -> bytes:
        self.reads += 1
        if self.chunks:
            return self.chunks.pop(0)
        if self.hang:
            await asyncio.Event().wait()
        return b""

    def write(self, text: str) -> None:
        self.output.write(text)

    def flush(self) -> None:
        pass

    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def text(self) -> str:
        return self.output.getvalue()


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def make_session() -> type[FakeSession]:
    """Factory for scripted sessions: ``make_session([b"\\r"], hang=True)``."""
    return FakeSession
