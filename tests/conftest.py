# tests/conftest.py
"""Pytest configuration with shared fixtures for the rawscreen tests."""

from __future__ import annotations

import atexit
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

from rawscreen.core.OutputChannel import OutputChannel
from rawscreen.core.TerminalSession import TerminalSession
from rawscreen.ui.TerminalAppMode import TerminalAppMode
from tests.stubs import CountingStream, ScriptedInput


@pytest.fixture
def stream() -> CountingStream:
    """In-memory terminal output that counts writes and flushes."""
    return CountingStream()


@pytest.fixture
def output(stream: CountingStream) -> OutputChannel:
    return OutputChannel(stream)


@pytest.fixture
def scripted_input() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture
def mock_mode() -> MagicMock:
    """Mode switcher that never touches the real terminal driver."""
    return MagicMock(spec=TerminalAppMode)


@pytest.fixture
def session_config() -> dict[str, dict[str, Any]]:
    return {
        "session": {
            "escape_delay_ms": 0,
            "default_foreground": 15,
            "default_background": 0,
        }
    }


@pytest.fixture
def session(
    session_config: dict[str, dict[str, Any]],
    output: OutputChannel,
    scripted_input: ScriptedInput,
    mock_mode: MagicMock,
) -> Generator[TerminalSession, None, None]:
    """A session wired to in-memory channels; not yet entered."""
    screen = TerminalSession(
        config=session_config,
        output=output,
        input_channel=scripted_input,
        mode=mock_mode,
    )
    yield screen
    # Never leave an atexit hook pointing at a test session.
    atexit.unregister(screen.exit)


@pytest.fixture
def active_session(session: TerminalSession, stream: CountingStream) -> TerminalSession:
    """An entered session whose setup output has been discarded."""
    session.enter()
    stream.seek(0)
    stream.truncate()
    return session
