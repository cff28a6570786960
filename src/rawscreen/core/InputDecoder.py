# rawscreen/core/InputDecoder.py
"""InputDecoder.py
========================
Turns the raw terminal byte stream into one key event per call.

Terminals report arrow keys and similar special keys as ESC-prefixed
multi-byte sequences, indistinguishable at the first byte from a lone ESC
press. After reading ESC the decoder waits a short, fixed delay and then
checks whether more input is already buffered:

    START         read byte n; n != ESC  -> n
    MAYBE_ESCAPE  sleep(delay); nothing buffered -> ESC
                  read byte k; k != '['  -> ESCAPE_BASE + k
    CSI_WAIT      read byte o; A/B/C/D/Z -> UP/DOWN/RIGHT/LEFT/SHIFT_TAB
                  otherwise              -> CSI_BASE + o

The delay heuristic assumes every byte of a real escape sequence arrives
within the window and that a lone ESC produces no immediate follow-up byte.
A stream that ends mid-sequence resolves to the unrecognized-escape case.
"""

from __future__ import annotations

import logging
import os
import select
import time
from typing import Callable, Optional, Protocol

from rawscreen.core import Keys
from rawscreen.utils.logging_config import KEY_LOGGER


logger = logging.getLogger("rawscreen")

DEFAULT_ESCAPE_DELAY_MS = 20


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]: ...

    def available(self) -> bool: ...


class InputChannel:
    """Unbuffered byte reader over a file descriptor (stdin by default).

    Reads go straight to ``os.read`` so that `available()` reflects exactly
    what the kernel holds; a Python-level read buffer would hide bytes from
    ``select``.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_byte(self) -> Optional[int]:
        """Blocks for one byte; returns ``None`` at end-of-stream."""
        data = os.read(self.fd, 1)
        if not data:
            return None
        return data[0]

    def available(self) -> bool:
        """True when a read would not block."""
        readable, _, _ = select.select([self.fd], [], [], 0)
        return bool(readable)


class InputDecoder:
    """Resolves raw input bytes into `Keys` event codes.

    Attributes:
        channel: Source of raw bytes (`InputChannel` or any object with
            ``read_byte()`` / ``available()``).
        delay_ms (int): How long to wait after ESC before deciding it was a
            standalone keypress.
    """

    def __init__(
        self,
        channel: ByteSource,
        delay_ms: int = DEFAULT_ESCAPE_DELAY_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.channel = channel
        self.delay_ms = delay_ms
        self._sleep = sleep

    def keypress(self) -> int:
        """Blocks until one logical key has been read and returns its code."""
        key = self._decode()
        KEY_LOGGER.debug("key %d (%s)", key, Keys.key_name(key))
        return key

    def _decode(self) -> int:
        n = self.channel.read_byte()
        if n is None:
            return Keys.EOF
        if n != Keys.ESC:
            return n

        self._sleep(self.delay_ms / 1000.0)
        if not self.channel.available():
            return Keys.ESC

        k = self.channel.read_byte()
        if k is None:
            return Keys.ESC
        if k != ord("["):
            return Keys.ESCAPE_BASE + k

        o = self.channel.read_byte()
        if o is None:
            logger.debug("Input ended inside a CSI sequence; reporting ESC [ as unrecognized.")
            return Keys.ESCAPE_BASE + k
        return Keys.CSI_KEYS.get(o, Keys.CSI_BASE + o)
