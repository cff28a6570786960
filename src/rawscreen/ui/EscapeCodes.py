# rawscreen/ui/EscapeCodes.py
"""EscapeCodes.py
========================
The escape-sequence sink: serializes atomic terminal commands as VT100/xterm
control sequences onto an `OutputChannel`.

Size queries do not go through the byte stream; they ask the kernel for the
window size of the output descriptor (``TIOCGWINSZ``) and fall back to
`shutil.get_terminal_size()` when the output is not a terminal.
"""

from __future__ import annotations

import logging
import shutil
import struct
from typing import TYPE_CHECKING

try:
    import fcntl
    import termios
except ImportError:  # pragma: no cover - non-POSIX platforms
    fcntl = None  # type: ignore[assignment]
    termios = None  # type: ignore[assignment]

if TYPE_CHECKING:
    from rawscreen.core.OutputChannel import OutputChannel


logger = logging.getLogger("rawscreen")

CSI = "\x1b["
ALT_SCR_ON = "\x1b[?1049h"
ALT_SCR_OFF = "\x1b[?1049l"
HIDE = "\x1b[?25l"
SHOW = "\x1b[?25h"
CLEAR = "\x1b[2J"

# struct winsize: ws_row, ws_col, ws_xpixel, ws_ypixel
_WINSZ_FMT = "HHHH"
_WINSZ_BUF = b"\x00" * struct.calcsize(_WINSZ_FMT)


class EscapeCodes:
    """Writes terminal commands to an output channel.

    Coordinates are zero-based. Negative coordinates are clamped to 0 here;
    coordinates past the right or bottom edge are clamped by the terminal
    itself.
    """

    def __init__(self, out: "OutputChannel") -> None:
        self.out = out

    def _emit(self, sequence: str) -> None:
        self.out.write(sequence.encode("ascii"))

    def move_cursor(self, x: int, y: int) -> None:
        self._emit(f"{CSI}{max(0, y) + 1};{max(0, x) + 1}H")

    def set_foreground(self, code: int) -> None:
        self._emit(f"{CSI}38;5;{code}m")

    def set_background(self, code: int) -> None:
        self._emit(f"{CSI}48;5;{code}m")

    def clear_screen(self) -> None:
        self._emit(CLEAR)

    def enter_alternate_buffer(self) -> None:
        self._emit(ALT_SCR_ON)

    def enter_normal_buffer(self) -> None:
        self._emit(ALT_SCR_OFF)

    def hide_cursor(self) -> None:
        self._emit(HIDE)

    def show_cursor(self) -> None:
        self._emit(SHOW)

    # ── size queries ─────────────────────────────────────────────────────────

    def _winsize(self) -> tuple[int, int, int, int] | None:
        if fcntl is None or termios is None:
            return None
        try:
            data = fcntl.ioctl(self.out.fileno(), termios.TIOCGWINSZ, _WINSZ_BUF)
        except (OSError, ValueError, AttributeError) as e:
            # Output is not a tty (pipe, file, test buffer).
            logger.debug("TIOCGWINSZ unavailable: %r", e)
            return None
        return struct.unpack(_WINSZ_FMT, data)

    def screen_size_cells(self) -> tuple[int, int]:
        """Returns ``(columns, rows)`` of the terminal."""
        winsize = self._winsize()
        if winsize and winsize[0] > 0 and winsize[1] > 0:
            rows, cols = winsize[0], winsize[1]
            return cols, rows
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    def screen_size_pixels(self) -> tuple[int, int]:
        """Returns ``(width, height)`` of the terminal window in pixels, or ``(0, 0)`` if unknown."""
        winsize = self._winsize()
        if not winsize:
            return 0, 0
        return winsize[2], winsize[3]
