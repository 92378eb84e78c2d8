"""Byte stream to key event decoding.

KeyDecoder is a small state machine over decoded characters:

    IDLE ──ESC──> SAW_ESC ──[──> SAW_CSI ──final byte──> IDLE
                          ──O──> SAW_SS3 ──any───────> IDLE
    SAW_CSI ──"200~"──> PASTE ──ESC[201~──> IDLE

State survives across ``feed()`` calls, so a chunk that splits a UTF-8
character or a CSI sequence is completed by the next chunk. Malformed or
unknown sequences are dropped; the decoder never raises on input.
"""

from __future__ import annotations

import codecs
import logging
from enum import Enum, auto
from typing import Iterable, Iterator

from ..config import Settings, load_settings
from .base import InputEvent

logger = logging.getLogger(__name__)

# CSI parameter bytes kept before an unterminated sequence is discarded.
MAX_SEQUENCE_LENGTH = 16

PASTE_END = "\x1b[201~"

# Seconds to wait for the rest of an escape sequence before a pending ESC is
# taken as the Escape key.
ESCAPE_TIMEOUT = 0.05

_VI_ALIASES = {"h": "Left", "j": "Down", "k": "Up", "l": "Right"}

_CSI_FINALS = {
    "A": "Up",
    "B": "Down",
    "C": "Right",
    "D": "Left",
    "H": "Home",
    "F": "End",
    "Z": "BackTab",
}

_CSI_TILDE = {
    "1": "Home",
    "7": "Home",
    "3": "Delete",
    "4": "End",
    "8": "End",
}

_SS3_FINALS = {
    "A": "Up",
    "B": "Down",
    "C": "Right",
    "D": "Left",
    "H": "Home",
    "F": "End",
}


class DecoderState(Enum):
    IDLE = auto()
    SAW_ESC = auto()
    SAW_CSI = auto()
    SAW_SS3 = auto()
    PASTE = auto()


_PENDING_STATES = frozenset(
    {DecoderState.SAW_ESC, DecoderState.SAW_CSI, DecoderState.SAW_SS3}
)

ESCAPE = InputEvent(key="Escape")


class KeyDecoder:
    """Turns raw terminal bytes into InputEvents.

    Args:
        vi_keys: Decode h/j/k/l as Left/Down/Up/Right.
        settings: Paste limit and key debugging; read from the environment
            when omitted.
    """

    def __init__(self, vi_keys: bool = False, settings: Settings | None = None) -> None:
        self.vi_keys = vi_keys
        settings = settings or load_settings()
        self._debug_keys = settings.debug_keys
        self._paste_limit = settings.paste_limit
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self.reset()

    @property
    def state(self) -> DecoderState:
        return self._state

    def reset(self) -> None:
        """Drop any partial sequence and start over."""
        self._state = DecoderState.IDLE
        self._params = ""
        self._paste: list[str] = []
        self._paste_tail = ""
        self._utf8.reset()

    @property
    def pending(self) -> bool:
        """True while an escape sequence has started but not finished.

        A trailing ESC may be the Escape key or the first byte of a sequence
        whose rest is still in transit; the caller waits ESCAPE_TIMEOUT for
        more input and calls flush() if none arrives.
        """
        return self._state in _PENDING_STATES

    def feed(self, data: bytes) -> list[InputEvent]:
        """Decode one chunk of input.

        An unfinished escape sequence at the end of the chunk is kept and
        completed by the next chunk.
        """
        events: list[InputEvent] = []
        for ch in self._utf8.decode(data):
            self._step(ch, events)
        return events

    def flush(self) -> list[InputEvent]:
        """Resolve whatever is pending: a lone ESC becomes the Escape key."""
        events: list[InputEvent] = []
        if self._state is DecoderState.SAW_ESC:
            events.append(ESCAPE)
        elif self._state is DecoderState.PASTE:
            events.append(InputEvent(key="Paste", char="".join(self._paste)))
        elif self._state is not DecoderState.IDLE:
            self._discard("incomplete sequence at end of input")
        self.reset()
        return events

    def decode(self, chunks: Iterable[bytes]) -> Iterator[InputEvent]:
        """Lazily decode an iterable of chunks, flushing at the end."""
        for chunk in chunks:
            yield from self.feed(chunk)
        yield from self.flush()

    def _discard(self, reason: str) -> None:
        if self._debug_keys:
            logger.debug("Dropped escape sequence %r: %s", self._params, reason)
        self._state = DecoderState.IDLE
        self._params = ""

    def _step(self, ch: str, events: list[InputEvent]) -> None:
        state = self._state
        if state is DecoderState.IDLE:
            self._step_idle(ch, events)
        elif state is DecoderState.SAW_ESC:
            if ch == "[":
                self._state = DecoderState.SAW_CSI
                self._params = ""
            elif ch == "O":
                self._state = DecoderState.SAW_SS3
            elif ch == "\x1b":
                events.append(ESCAPE)
            else:
                # Meta-modified keys are not distinguished from Escape
                self._state = DecoderState.IDLE
                events.append(ESCAPE)
        elif state is DecoderState.SAW_SS3:
            self._state = DecoderState.IDLE
            name = _SS3_FINALS.get(ch)
            if name:
                events.append(InputEvent(key=name))
            else:
                self._params = "O" + ch
                self._discard("unknown SS3 sequence")
        elif state is DecoderState.SAW_CSI:
            self._step_csi(ch, events)
        else:
            self._step_paste(ch, events)

    def _step_idle(self, ch: str, events: list[InputEvent]) -> None:
        if ch == "\x1b":
            self._state = DecoderState.SAW_ESC
        elif ch in ("\r", "\n"):
            events.append(InputEvent(key="Enter"))
        elif ch in ("\x7f", "\x08"):
            events.append(InputEvent(key="Backspace"))
        elif ch == "\t":
            events.append(InputEvent(key="Tab"))
        elif ch == "\x03":
            events.append(InputEvent(key="Interrupt", char="c", ctrl=True))
        elif ch == " ":
            events.append(InputEvent(key="Space", char=" "))
        elif ord(ch) < 32:
            # Map Ctrl+<letter> to its letter (Ctrl+A -> "a", etc.)
            letter = chr(ord(ch) + 96)
            if "a" <= letter <= "z":
                events.append(InputEvent(key=letter, char=letter, ctrl=True))
        elif not ch.isprintable():
            return
        elif self.vi_keys and ch in _VI_ALIASES:
            events.append(InputEvent(key=_VI_ALIASES[ch], char=ch))
        else:
            events.append(InputEvent(key=ch, char=ch))

    def _step_csi(self, ch: str, events: list[InputEvent]) -> None:
        if "\x40" <= ch <= "\x7e":
            params, self._params = self._params, ""
            self._state = DecoderState.IDLE
            self._finish_csi(params, ch, events)
        elif "\x20" <= ch <= "\x3f":
            self._params += ch
            if len(self._params) >= MAX_SEQUENCE_LENGTH:
                self._discard("sequence too long")
        else:
            # A control byte cannot appear inside CSI; drop the sequence
            # and treat the byte as fresh input.
            self._discard("interrupted sequence")
            self._step_idle(ch, events)

    def _finish_csi(self, params: str, final: str, events: list[InputEvent]) -> None:
        if final in _CSI_FINALS:
            # Modifier parameters (e.g. "1;5" for Ctrl+Up) are ignored.
            events.append(InputEvent(key=_CSI_FINALS[final]))
            return
        if final == "~":
            if params == "200":
                self._state = DecoderState.PASTE
                self._paste = []
                self._paste_tail = ""
                return
            name = _CSI_TILDE.get(params)
            if name:
                events.append(InputEvent(key=name))
                return
        if final == "u" and params == "13":
            events.append(InputEvent(key="Enter"))
            return
        self._params = params + final
        self._discard("unknown CSI sequence")

    def _step_paste(self, ch: str, events: list[InputEvent]) -> None:
        self._paste_tail = (self._paste_tail + ch)[-len(PASTE_END) :]
        if len(self._paste) < self._paste_limit + len(PASTE_END):
            self._paste.append(ch)
        if self._paste_tail != PASTE_END:
            return
        text = "".join(self._paste)
        if text.endswith(PASTE_END):
            text = text[: -len(PASTE_END)]
        events.append(InputEvent(key="Paste", char=text[: self._paste_limit]))
        self._state = DecoderState.IDLE
        self._paste = []
        self._paste_tail = ""
