# rawscreen/core/Colors.py
"""Numeric xterm-256 color codes.

Colors are opaque ints passed straight through to the terminal; these names
cover the 16 standard palette entries. `from_hex` maps ``#rrggbb`` strings to
the nearest palette index.
"""

from rawscreen.utils.utils import hex_to_xterm

DIM_BLACK = 0
DIM_RED = 1
DIM_GREEN = 2
DIM_YELLOW = 3
DIM_BLUE = 4
DIM_MAGENTA = 5
DIM_CYAN = 6
DIM_WHITE = 7
BRIGHT_BLACK = 8
BRIGHT_RED = 9
BRIGHT_GREEN = 10
BRIGHT_YELLOW = 11
BRIGHT_BLUE = 12
BRIGHT_MAGENTA = 13
BRIGHT_CYAN = 14
BRIGHT_WHITE = 15

DEFAULT_FOREGROUND = BRIGHT_WHITE
DEFAULT_BACKGROUND = DIM_BLACK


def from_hex(hex_color: str) -> int:
    """Nearest xterm-256 index for ``#rrggbb``; 255 when the string is malformed."""
    return hex_to_xterm(hex_color)
