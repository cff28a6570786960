"""Unit tests for the `TerminalAppMode` raw/cooked switcher.

A pseudo-terminal pair stands in for the controlling terminal, so the real
termios attributes can be inspected before, during and after raw mode.
"""

import os
import termios
from typing import Generator

import pytest

from rawscreen.ui.TerminalAppMode import TerminalAppMode
from rawscreen.utils.errors import TerminalModeError

LFLAG = 3


@pytest.fixture
def pty_pair() -> Generator[tuple[int, str], None, None]:
    """Yields the slave fd of a fresh pty and its device path."""
    try:
        master, slave = os.openpty()
    except OSError as e:
        pytest.skip(f"pseudo-terminals unavailable: {e}")
    try:
        yield slave, os.ttyname(slave)
    finally:
        os.close(slave)
        os.close(master)


def test_raw_mode_disables_echo_and_line_buffering(pty_pair) -> None:
    fd, path = pty_pair
    mode = TerminalAppMode(path)
    mode.enter_raw_no_echo()
    try:
        assert mode.is_raw
        lflag = termios.tcgetattr(fd)[LFLAG]
        assert not lflag & termios.ECHO
        assert not lflag & termios.ICANON
        assert not lflag & termios.ISIG
    finally:
        mode.restore_cooked_echo()
    assert not mode.is_raw


def test_restore_puts_back_original_attributes(pty_pair) -> None:
    """User customizations present before entering survive the round trip."""
    fd, path = pty_pair
    custom = termios.tcgetattr(fd)
    custom[0] &= ~termios.IXON
    custom[6][termios.VERASE] = b"\x08"
    termios.tcsetattr(fd, termios.TCSANOW, custom)
    before = termios.tcgetattr(fd)

    mode = TerminalAppMode(path)
    mode.enter_raw_no_echo()
    mode.restore_cooked_echo()

    assert termios.tcgetattr(fd) == before


def test_enter_and_restore_are_idempotent(pty_pair) -> None:
    fd, path = pty_pair
    before = termios.tcgetattr(fd)
    mode = TerminalAppMode(path)
    mode.restore_cooked_echo()
    mode.enter_raw_no_echo()
    mode.enter_raw_no_echo()
    mode.restore_cooked_echo()
    mode.restore_cooked_echo()
    assert termios.tcgetattr(fd) == before


def test_unavailable_terminal_device_raises(tmp_path) -> None:
    mode = TerminalAppMode(str(tmp_path / "missing-tty"))
    with pytest.raises(TerminalModeError, match="cannot open terminal device"):
        mode.enter_raw_no_echo()
    assert not mode.is_raw


def test_non_terminal_device_raises(tmp_path) -> None:
    path = tmp_path / "not-a-tty"
    path.write_bytes(b"")
    mode = TerminalAppMode(str(path))
    with pytest.raises(TerminalModeError, match="cannot enter raw mode"):
        mode.enter_raw_no_echo()
    assert not mode.is_raw
