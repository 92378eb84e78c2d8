"""Terminal control for interactive elements.

This module provides:
- ANSI: Centralized terminal escape sequences and width helpers
- TerminalSession: Exclusive raw-mode ownership of the controlling terminal
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import select
import shutil
import signal
import sys
import termios
import threading
import tty
from types import FrameType
from typing import Any, TextIO

import wcwidth

from ..errors import AlreadyOpenError, NotATTYError, SessionClosedError

logger = logging.getLogger(__name__)

# Bytes requested per read; one keypress or escape sequence fits easily.
READ_SIZE = 1024
# How often a blocked read() re-checks whether the session was closed.
POLL_INTERVAL = 0.1


# One CSI sequence: ESC [, parameter and intermediate bytes, one final byte.
# The group makes re.split() keep the sequences.
_CSI_RE = re.compile(r"(\x1b\[[0-?]*[ -/]*[@-~])")


def _cell_width(ch: str) -> int:
    # wcwidth returns -1 for control characters
    return max(wcwidth.wcwidth(ch), 0)


class ANSI:
    """Escape sequences the renderer writes, and cell-width helpers.

    Widths are measured in terminal cells: escape sequences take none, wide
    (CJK, emoji) characters take two, combining marks take none.
    """

    RESET = "\033[0m"
    DIM = "\033[2m"
    REVERSE = "\033[7m"
    STRIKETHROUGH = "\033[9m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"

    HIDE_CURSOR = "\033[?25l"
    SHOW_CURSOR = "\033[?25h"
    CLEAR_LINE = "\033[2K"
    CLEAR_TO_END = "\033[K"
    CARRIAGE_RETURN = "\r"
    ENABLE_BRACKETED_PASTE = "\033[?2004h"
    DISABLE_BRACKETED_PASTE = "\033[?2004l"

    @staticmethod
    def cursor_up(n: int = 1) -> str:
        return f"\033[{n}A" if n > 0 else ""

    @staticmethod
    def cursor_down(n: int = 1) -> str:
        return f"\033[{n}B" if n > 0 else ""

    @staticmethod
    def terminal_width() -> int:
        return shutil.get_terminal_size().columns

    @staticmethod
    def strip_ansi(s: str) -> str:
        return _CSI_RE.sub("", s)

    @classmethod
    def visual_len(cls, s: str) -> int:
        """Number of cells ``s`` occupies once printed."""
        return sum(_cell_width(ch) for ch in cls.strip_ansi(s))

    @classmethod
    def truncate_to_width(cls, s: str, max_width: int, ellipsis: str = "…") -> str:
        """Cut ``s`` so it fits in ``max_width`` cells.

        A cut line ends with ``ellipsis`` and RESET. Escape sequences before
        the cut are kept, so colors opened earlier still apply.
        """
        if max_width <= 0:
            return ""
        if cls.visual_len(s) <= max_width:
            return s
        budget = max_width - cls.visual_len(ellipsis)
        if budget <= 0:
            return ellipsis[:max_width]

        kept: list[str] = []
        used = 0
        for i, part in enumerate(_CSI_RE.split(s)):
            if i % 2:
                kept.append(part)
                continue
            for ch in part:
                used += _cell_width(ch)
                if used > budget:
                    return "".join(kept) + ellipsis + cls.RESET
                kept.append(ch)
        return "".join(kept) + ellipsis + cls.RESET


class TerminalSession:
    """Exclusive raw-mode session on the controlling terminal.

    Only one session may be open per process; interleaved raw-mode writers
    would corrupt the screen.

    Usage:
        with TerminalSession() as session:
            data = session.read()
            session.write("...")

    ``close()`` is idempotent and restores the original terminal settings.
    A session is single-use: once closed it cannot be reopened.
    """

    _owner_lock = threading.Lock()
    _owner: TerminalSession | None = None

    def __init__(self, input_fd: int | None = None, output: TextIO | None = None) -> None:
        self._input_fd = input_fd
        self.output: TextIO = output if output is not None else sys.stdout
        self.fd = -1
        self.old_settings: list[Any] | None = None
        self._is_open = False
        self._closed = False
        self._size = (80, 24)
        self._prev_winch: Any = None
        self._winch_installed = False
        self._waiter: asyncio.Future[None] | None = None

    def __enter__(self) -> TerminalSession:
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._is_open

    def _resolve_fd(self) -> int:
        if self._input_fd is not None:
            return self._input_fd
        try:
            return sys.stdin.fileno()
        except (AttributeError, ValueError, OSError) as exc:
            raise NotATTYError("stdin") from exc

    def _output_isatty(self) -> bool:
        try:
            return self.output.isatty()
        except (AttributeError, ValueError):
            return False

    def open(self) -> None:
        """Enter raw mode.

        Raises:
            NotATTYError: stdin or stdout is not an interactive terminal
            AlreadyOpenError: another session currently owns the terminal
            SessionClosedError: this session was already closed
        """
        if self._closed:
            raise SessionClosedError()

        fd = self._resolve_fd()
        if not os.isatty(fd):
            raise NotATTYError("stdin")
        if not self._output_isatty():
            raise NotATTYError("stdout")

        with TerminalSession._owner_lock:
            if TerminalSession._owner is not None:
                raise AlreadyOpenError()
            TerminalSession._owner = self

        self.fd = fd
        try:
            self.old_settings = termios.tcgetattr(fd)
            # Flush any pending input to avoid stale keystrokes
            termios.tcflush(fd, termios.TCIFLUSH)
            tty.setraw(fd)
            # Re-enable output post-processing so '\n' moves to column 1.
            attrs = termios.tcgetattr(fd)
            attrs[1] |= termios.OPOST | termios.ONLCR
            termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
            self._is_open = True
            self._refresh_size()
            self._install_resize_handler()
            self.write(ANSI.ENABLE_BRACKETED_PASTE)
            self.flush()
        except BaseException:
            # Hand the terminal back exactly as it was found
            self._is_open = False
            try:
                self._restore_terminal()
            finally:
                self._release_owner()
            raise
        logger.debug("Terminal session opened on fd %d (%dx%d)", fd, *self._size)

    def close(self) -> None:
        """Restore terminal settings. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if not self._is_open:
            return
        self._is_open = False

        try:
            self.write(ANSI.DISABLE_BRACKETED_PASTE)
            self.flush()
        finally:
            self._restore_terminal()
            if self._waiter is not None and not self._waiter.done():
                self._waiter.set_exception(SessionClosedError())
            self._release_owner()
        logger.debug("Terminal session on fd %d closed", self.fd)

    def _restore_terminal(self) -> None:
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
        self._restore_resize_handler()

    def _release_owner(self) -> None:
        with TerminalSession._owner_lock:
            if TerminalSession._owner is self:
                TerminalSession._owner = None

    def read(self) -> bytes:
        """Block until input is available and return it.

        Returns b"" at end of input.

        Raises:
            SessionClosedError: the session is (or becomes) closed
        """
        while True:
            if not self._is_open:
                raise SessionClosedError()
            ready, _, _ = select.select([self.fd], [], [], POLL_INTERVAL)
            if ready:
                break
        try:
            return os.read(self.fd, READ_SIZE)
        except OSError as exc:
            if not self._is_open:
                raise SessionClosedError() from exc
            raise

    async def read_async(self) -> bytes:
        """Await input via the event loop's reader callback, then read it."""
        if not self._is_open:
            raise SessionClosedError()
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()

        def _ready() -> None:
            if not waiter.done():
                waiter.set_result(None)

        loop.add_reader(self.fd, _ready)
        self._waiter = waiter
        try:
            await waiter
        finally:
            loop.remove_reader(self.fd)
            self._waiter = None
        return self.read()

    def write(self, text: str) -> None:
        self.output.write(text)

    def flush(self) -> None:
        self.output.flush()

    def size(self) -> tuple[int, int]:
        """Return (columns, rows), refreshed on SIGWINCH."""
        return self._size

    def _refresh_size(self) -> None:
        size = shutil.get_terminal_size()
        self._size = (size.columns, size.lines)

    def _on_resize(self, signum: int, frame: FrameType | None) -> None:
        self._refresh_size()
        if callable(self._prev_winch):
            self._prev_winch(signum, frame)

    def _install_resize_handler(self) -> None:
        # signal.signal() only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        try:
            self._prev_winch = signal.signal(signal.SIGWINCH, self._on_resize)
        except (ValueError, OSError):
            return
        self._winch_installed = True

    def _restore_resize_handler(self) -> None:
        if not self._winch_installed:
            return
        previous = self._prev_winch if self._prev_winch is not None else signal.SIG_DFL
        signal.signal(signal.SIGWINCH, previous)
        self._winch_installed = False
        self._prev_winch = None
