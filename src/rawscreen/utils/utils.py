# rawscreen/utils/utils.py
"""
rawscreen.utils.utils.py
========================

Core utility functions shared by the rawscreen package.

Key functionalities include:
- Automatic User Configuration: creates `config.toml` and `.env` templates in
  `~/.config/rawscreen` on first run.
- Robust Configuration Loading: starts from the embedded `DEFAULT_CONFIG`,
  then recursively merges user settings from `~/.config/rawscreen/config.toml`
  and a couple of environment overrides.
- Helper Utilities: dictionary deep-merge and hex to xterm-256 color conversion.

The package is always runnable, even when user configuration files are missing
or corrupted, by falling back to the embedded defaults.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger("rawscreen")

# --- Constants ---
DIM_BLACK_IDX = 0
BRIGHT_WHITE_IDX = 15
WHITE_FG_IDX = 255

ENV_TEMPLATE = """# Environment overrides for rawscreen
# Milliseconds to wait after ESC before deciding it was a lone keypress.
RAWSCREEN_ESCDELAY=
# Terminal device used when switching raw/cooked modes.
RAWSCREEN_TTY=
# Set to 1 to trace every decoded key into keytrace.log.
RAWSCREEN_KEYTRACE=
"""

# Hardcoded representation of the packaged `config.toml`.
# It serves as the ultimate fallback, ensuring a session can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "session": {
        "escape_delay_ms": 20,
        "output_buffer_size": 1024 * 1024,
        "default_foreground": BRIGHT_WHITE_IDX,
        "default_background": DIM_BLACK_IDX,
        "tty_path": "/dev/tty",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
    "demo": {
        "title_color": "#5fd7ff",
        "hint_color": "#808080",
        "quit_key": "q",
    },
}


# --- Helper Functions ---

def get_config_dir() -> Path:
    """Returns the per-user configuration directory."""
    return Path.home() / ".config" / "rawscreen"


def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    return Path(__file__).resolve().parents[3]


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/rawscreen` and creates them if missing."""
    try:
        config_dir = get_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            source_config_path = get_project_root() / "config.toml"
            if source_config_path.exists():
                shutil.copy(source_config_path, user_config_path)
                logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except Exception as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Applies `RAWSCREEN_ESCDELAY` and `RAWSCREEN_TTY` on top of `config`.

    Empty or malformed values are ignored so a blank `.env` template is harmless.
    """
    session = dict(config.get("session", {}))

    delay = os.environ.get("RAWSCREEN_ESCDELAY", "").strip()
    if delay:
        try:
            session["escape_delay_ms"] = int(delay)
        except ValueError:
            logger.warning(f"Ignoring non-integer RAWSCREEN_ESCDELAY={delay!r}")

    tty_path = os.environ.get("RAWSCREEN_TTY", "").strip()
    if tty_path:
        session["tty_path"] = tty_path

    return deep_merge(config, {"session": session})


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring a session can always be started.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = get_config_dir() / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return apply_env_overrides(final_config)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
