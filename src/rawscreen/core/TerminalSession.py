# rawscreen/core/TerminalSession.py
"""TerminalSession.py
========================
TerminalSession: owns the terminal lifecycle and the coordinate/paint API.

A session:
- enters the application state (alternate screen, cleared, hidden cursor,
  raw no-echo input) and restores the normal state on exit;
- paints colored text at offset-adjusted coordinates, replacing control
  characters so they cannot inject escape sequences;
- keeps an (x, y) offset that callers move around to draw relative to a
  region origin;
- reads single key events through an `InputDecoder`.

Writes are buffered in the `OutputChannel` and become visible on `refresh()`.
There is no screen model: each `put` goes straight to the channel.

Example:
    >>> with TerminalSession() as screen:
    ...     screen.put(1, 1, "Hello!", Colors.BRIGHT_CYAN)
    ...     screen.put(1, 2, "Press any key to exit", Colors.BRIGHT_BLACK)
    ...     screen.refresh()
    ...     screen.keypress()
"""

from __future__ import annotations

import atexit
import logging
import sys
from typing import Any, Callable, Optional, TypeVar

from rawscreen.core import Colors
from rawscreen.core.InputDecoder import DEFAULT_ESCAPE_DELAY_MS, ByteSource, InputChannel, InputDecoder
from rawscreen.core.OutputChannel import DEFAULT_BUFFER_SIZE, OutputChannel
from rawscreen.ui.EscapeCodes import EscapeCodes
from rawscreen.ui.TerminalAppMode import TerminalAppMode
from rawscreen.utils.errors import SessionStateError


logger = logging.getLogger("rawscreen")

T = TypeVar("T")


def sanitize(text: str) -> str:
    """Replaces every character below code point 32 with ``'?'``; length is preserved."""
    return "".join(ch if ord(ch) >= 32 else "?" for ch in text)


## ================= class TerminalSession ==============================
class TerminalSession:
    """Terminal session with enter/exit bracketing and offset-relative painting.

    Attributes:
        config (dict[str, Any]): Full configuration; only ``["session"]`` is read.
        out (OutputChannel): Buffered terminal output.
        csi (EscapeCodes): Command sink writing to `out`.
        mode (TerminalAppMode): Raw/cooked mode switcher.
        decoder (InputDecoder): Key decoder reading from the input channel.
        offset_x (int), offset_y (int): Added to every `put`/`move` coordinate.
        default_foreground (int), default_background (int): Colors used when
            `put` is called without explicit ones.
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        output: Optional[OutputChannel] = None,
        input_channel: Optional[ByteSource] = None,
        mode: Optional[TerminalAppMode] = None,
    ) -> None:
        self.config = config or {}
        session_cfg = self.config.get("session", {})

        self.out = output or OutputChannel(
            sys.stdout.buffer,
            session_cfg.get("output_buffer_size", DEFAULT_BUFFER_SIZE),
        )
        self.csi = EscapeCodes(self.out)
        self.mode = mode or TerminalAppMode(session_cfg.get("tty_path", "/dev/tty"))
        self.escape_delay_ms: int = session_cfg.get("escape_delay_ms", DEFAULT_ESCAPE_DELAY_MS)
        # Without an explicit channel, stdin is bound on enter().
        self.decoder: Optional[InputDecoder] = (
            InputDecoder(input_channel, delay_ms=self.escape_delay_ms) if input_channel is not None else None
        )

        self.default_foreground: int = session_cfg.get("default_foreground", Colors.DEFAULT_FOREGROUND)
        self.default_background: int = session_cfg.get("default_background", Colors.DEFAULT_BACKGROUND)

        self.offset_x: int = 0
        self.offset_y: int = 0
        self._active: bool = False

    # ── lifecycle ─────────────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        return self._active

    def enter(self) -> None:
        """Switches to the alternate screen, clears it, hides the cursor and enters raw mode."""
        if self._active:
            raise SessionStateError("terminal session is already active")
        if self.decoder is None:
            self.decoder = InputDecoder(InputChannel(sys.stdin.fileno()), delay_ms=self.escape_delay_ms)

        self.csi.enter_alternate_buffer()
        self.csi.clear_screen()
        self.csi.hide_cursor()
        self.refresh()

        self._active = True
        # Safety net for interpreter shutdown without a matching exit().
        atexit.register(self.exit)
        try:
            self.mode.enter_raw_no_echo()
        except Exception:
            logger.error("Could not enter raw mode; restoring the screen.", exc_info=True)
            try:
                self.exit()
            except Exception:
                logger.error("Screen restoration after a failed enter also failed.", exc_info=True)
            raise
        logger.debug("TerminalSession: entered (alternate screen + raw mode).")

    def exit(self) -> None:
        """Restores the normal screen, the cursor and cooked mode.

        Every restoration step is attempted even if an earlier one fails; the
        first failure is re-raised once all steps have run. Calling `exit` on a
        session that is not active does nothing.
        """
        if not self._active:
            return
        self._active = False
        atexit.unregister(self.exit)

        first_error: Optional[BaseException] = None
        steps: tuple[tuple[str, Callable[[], None]], ...] = (
            ("clear screen", self.csi.clear_screen),
            ("leave alternate buffer", self.csi.enter_normal_buffer),
            ("show cursor", self.csi.show_cursor),
            ("flush output", self.out.flush),
            ("restore cooked mode", self.mode.restore_cooked_echo),
        )
        for label, step in steps:
            try:
                step()
            except Exception as e:
                logger.error("TerminalSession: %s failed during exit.", label, exc_info=True)
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        logger.debug("TerminalSession: exited (restored terminal modes).")

    def __enter__(self) -> "TerminalSession":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exit()

    def _require_active(self) -> None:
        if not self._active:
            raise SessionStateError("terminal session is not active; call enter() first")

    # ── painting ──────────────────────────────────────────────────────────────

    def put(
        self,
        x: int,
        y: int,
        text: str,
        foreground: Optional[int] = None,
        background: Optional[int] = None,
    ) -> None:
        """Writes `text` at ``(x, y)`` relative to the current offset.

        Colors stay set after the call. Nothing is flushed.
        """
        self._require_active()
        self.csi.move_cursor(x + self.offset_x, y + self.offset_y)
        self.csi.set_foreground(self.default_foreground if foreground is None else foreground)
        self.csi.set_background(self.default_background if background is None else background)
        self.out.write_text(sanitize(text))

    def move(self, x: int, y: int) -> None:
        """Shows the cursor and places it at ``(x, y)`` relative to the current offset."""
        self._require_active()
        self.csi.show_cursor()
        self.csi.move_cursor(x + self.offset_x, y + self.offset_y)

    def hide_cursor(self) -> None:
        self._require_active()
        self.csi.hide_cursor()

    def show_cursor(self) -> None:
        self._require_active()
        self.csi.show_cursor()

    def clear(self) -> None:
        self._require_active()
        self.csi.clear_screen()

    def refresh(self) -> None:
        """Flushes buffered output to the terminal."""
        self.out.flush()

    # ── offsets ───────────────────────────────────────────────────────────────

    @property
    def offset(self) -> tuple[int, int]:
        return self.offset_x, self.offset_y

    def translate_offset(self, dx: int = 0, dy: int = 0) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def set_offset(self, x: int, y: int) -> None:
        self.offset_x = x
        self.offset_y = y

    def reset_offset(self) -> None:
        self.offset_x = 0
        self.offset_y = 0

    # ── queries and input ─────────────────────────────────────────────────────

    def size(self) -> tuple[int, int]:
        """Returns ``(width, height)`` of the screen in character cells."""
        return self.csi.screen_size_cells()

    def dimensions(self) -> tuple[int, int]:
        """Returns ``(width, height)`` of the terminal window in pixels."""
        return self.csi.screen_size_pixels()

    def keypress(self) -> int:
        """Blocks for one key event; see `rawscreen.core.Keys` for the codes."""
        self._require_active()
        return self.decoder.keypress()


def wrapper(func: Callable[..., T], *args: Any, config: Optional[dict[str, Any]] = None, **kwargs: Any) -> T:
    """Runs ``func(screen, *args, **kwargs)`` inside an active session.

    The terminal is restored however `func` returns, in the spirit of
    `curses.wrapper`.
    """
    with TerminalSession(config=config) as screen:
        return func(screen, *args, **kwargs)
