# src/rawscreen/core/__init__.py
"""Public facade for rawscreen.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (TerminalSession.py, InputDecoder.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from . import Colors, Keys  # noqa: F401
from rawscreen.utils.errors import RawScreenError, SessionStateError, TerminalModeError  # noqa: F401
from .InputDecoder import InputChannel, InputDecoder  # noqa: F401
from .OutputChannel import OutputChannel  # noqa: F401
from .TerminalSession import TerminalSession, sanitize, wrapper  # noqa: F401


__all__ = [
    "Colors",
    "Keys",
    "InputChannel",
    "InputDecoder",
    "OutputChannel",
    "RawScreenError",
    "SessionStateError",
    "TerminalModeError",
    "TerminalSession",
    "sanitize",
    "wrapper",
]
