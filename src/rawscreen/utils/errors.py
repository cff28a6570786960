# rawscreen/utils/errors.py
"""Exception types raised by rawscreen.

I/O failures on the terminal channels are not wrapped: `OSError` and its
subclasses propagate to the caller unchanged.
"""


class RawScreenError(Exception):
    """Base class for all rawscreen errors."""


class TerminalModeError(RawScreenError):
    """The OS terminal could not be switched between raw and cooked modes."""


class SessionStateError(RawScreenError):
    """A session operation was called in the wrong lifecycle state."""
