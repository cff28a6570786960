#!/usr/bin/env python3
# /rawscreen/main.py
"""
rawscreen Key Inspector
=======================

Demo entry point that exercises a full terminal session:
1) Environment Loading: reads ~/.config/rawscreen/.env early.
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Session: enters the alternate screen in raw mode, draws a small panel and
   shows the code and name of every key pressed until the quit key.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# --- Step 1: Load Environment Variables from the User's Config Directory ---
try:
    load_dotenv(dotenv_path=Path.home() / ".config" / "rawscreen" / ".env")
except OSError:
    # Missing HOME or unreadable file: environment overrides are optional.
    pass

# --- Step 2: Immediate Logging and Configuration Setup ---
try:
    from rawscreen.core import Colors, Keys, TerminalSession, wrapper
    from rawscreen.utils.logging_config import setup_logging
    from rawscreen.utils.utils import load_config

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("rawscreen")
except Exception as e:
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc()
    sys.exit(1)


def describe_key(key: int) -> list[str]:
    """Returns the inspector lines shown for one key event."""
    lines = [
        f"{'Value (int):':<16} {key}",
        f"{'Name:':<16} {Keys.key_name(key)}",
    ]
    if key >= Keys.ESCAPE_BASE:
        lines.append(f"{'Sequence:':<16} ESC {chr(key - Keys.ESCAPE_BASE)!r}")
    elif key >= Keys.CSI_BASE:
        lines.append(f"{'Sequence:':<16} ESC [ {chr(key - Keys.CSI_BASE)!r}")
    elif 0 <= key < 256:
        lines.append(f"{'Value (hex):':<16} {hex(key)}")
    return lines


def inspector(screen: TerminalSession, config: dict[str, Any]) -> None:
    """Draws the inspector panel and loops until the quit key or end of input."""
    demo_cfg = config.get("demo", {})
    title_color = Colors.from_hex(demo_cfg.get("title_color", "#5fd7ff"))
    hint_color = Colors.from_hex(demo_cfg.get("hint_color", "#808080"))
    quit_key = ord(str(demo_cfg.get("quit_key", "q"))[:1] or "q")

    last: list[str] = []
    while True:
        screen.clear()
        screen.reset_offset()
        width, height = screen.size()
        px_w, px_h = screen.dimensions()

        screen.put(2, 1, "rawscreen key inspector", title_color)
        screen.put(2, 2, f"Press any key to see its code. Press {chr(quit_key)!r} to quit.", hint_color)
        screen.put(2, 3, f"Screen: {width}x{height} cells, {px_w}x{px_h} px", hint_color)

        screen.translate_offset(4, 5)
        for row, line in enumerate(last):
            screen.put(0, row, line)
        screen.refresh()

        key = screen.keypress()
        if key in (quit_key, Keys.EOF):
            break
        last = describe_key(key)
        logger.debug("Inspected key %d (%s)", key, Keys.key_name(key))


def start() -> None:
    logger.info("rawscreen key inspector starting up...")
    try:
        wrapper(inspector, config, config=config)
        logger.info("rawscreen key inspector shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
