# rawscreen/ui/TerminalAppMode.py
from __future__ import annotations

import logging
import os
import termios
import tty
from typing import Any, Optional

from rawscreen.utils.errors import TerminalModeError


logger = logging.getLogger("rawscreen")


class TerminalAppMode:
    """
    Switch the OS terminal driver between raw and cooked input:

    - `enter_raw_no_echo()`: saves the current attributes of the terminal
      device, then puts it in raw mode (no line buffering, no echo, no
      signal keys; every byte is delivered to the app as typed).
    - `restore_cooked_echo()`: puts back exactly the attributes saved on
      entry, so user settings such as a custom erase key survive.

    The controlling terminal device (``/dev/tty`` by default) is used rather
    than the process's stdin, so it works even when stdin is redirected.

    Always pair `enter_raw_no_echo()` with `restore_cooked_echo()` (try/finally).
    """

    def __init__(self, tty_path: str = "/dev/tty") -> None:
        self.tty_path = tty_path
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list[Any]] = None

    @property
    def is_raw(self) -> bool:
        return self._saved_attrs is not None

    def enter_raw_no_echo(self) -> None:
        if self.is_raw:
            return
        try:
            fd = os.open(self.tty_path, os.O_RDWR | os.O_NOCTTY)
        except OSError as e:
            raise TerminalModeError(f"cannot open terminal device {self.tty_path!r}: {e}") from e

        try:
            saved = termios.tcgetattr(fd)
            # setraw also clears ECHO.
            tty.setraw(fd, termios.TCSAFLUSH)
        except (termios.error, OSError) as e:
            os.close(fd)
            raise TerminalModeError(f"cannot enter raw mode on {self.tty_path!r}: {e}") from e

        self._fd, self._saved_attrs = fd, saved
        logger.debug("TerminalAppMode: entered raw/no-echo mode on %s.", self.tty_path)

    def restore_cooked_echo(self) -> None:
        if not self.is_raw:
            return
        fd, saved = self._fd, self._saved_attrs
        self._fd, self._saved_attrs = None, None
        try:
            termios.tcsetattr(fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as e:
            raise TerminalModeError(f"cannot restore terminal mode on {self.tty_path!r}: {e}") from e
        finally:
            os.close(fd)
        logger.debug("TerminalAppMode: restored saved terminal mode on %s.", self.tty_path)
