# rawscreen/core/Keys.py
"""Key event codes returned by `InputDecoder.keypress()`.

A key event is a plain int:

- ``0..255``: the byte read from the terminal (printable, control, or a lone ESC);
- ``UP``, ``DOWN``, ``LEFT``, ``RIGHT``, ``SHIFT_TAB``: recognized CSI sequences;
- ``CSI_BASE + final``: an unrecognized ``ESC [ <final>`` sequence;
- ``ESCAPE_BASE + second``: an ``ESC <second>`` sequence that is not CSI
  (typically Alt/Meta chords);
- ``EOF``: the input channel reached end-of-stream.
"""

from __future__ import annotations

# Raw bytes
CTRL_C = 3
TAB = 9
ENTER = 13
ESC = 27
SPACE = 32
BACKSPACE = 127

# Symbolic keys, outside the byte range and below the escape ranges
UP = 1000
DOWN = 1001
LEFT = 1002
RIGHT = 1003
SHIFT_TAB = 1004

EOF = -1

CSI_BASE = 10000
ESCAPE_BASE = 20000

# CSI final byte -> symbolic key
CSI_KEYS: dict[int, int] = {
    ord("A"): UP,
    ord("B"): DOWN,
    ord("C"): RIGHT,
    ord("D"): LEFT,
    ord("Z"): SHIFT_TAB,
}

_NAMES: dict[int, str] = {
    UP: "UP",
    DOWN: "DOWN",
    LEFT: "LEFT",
    RIGHT: "RIGHT",
    SHIFT_TAB: "SHIFT_TAB",
    EOF: "EOF",
    TAB: "TAB",
    ENTER: "ENTER",
    ESC: "ESC",
    SPACE: "SPACE",
    BACKSPACE: "BACKSPACE",
}


def ctrl(char: str) -> int:
    """Returns the byte produced by Ctrl+`char` in raw mode, e.g. ``ctrl("q") == 17``."""
    return ord(char.upper()) & 0x1F


def key_name(code: int) -> str:
    """Returns a human-readable name for a key event code."""
    if code in _NAMES:
        return _NAMES[code]
    if code >= ESCAPE_BASE:
        return f"ALT+{chr(code - ESCAPE_BASE)}"
    if code >= CSI_BASE:
        return f"CSI {chr(code - CSI_BASE)}"
    if 0 <= code < 32:
        return f"CTRL+{chr(code + 64)}"
    if 32 <= code < 256:
        return chr(code)
    return "N/A"
