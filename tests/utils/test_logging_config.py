# tests/utils/test_logging_config.py
"""Unit tests for the logging configuration utility.
===================================================

Verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Keeps the console handler off unless asked for.
- Enables the key-event trace only when RAWSCREEN_KEYTRACE is set.

Every test runs in a temporary working directory to avoid touching real files.
"""

import logging

import pytest

from rawscreen.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Closes the file and console handlers a test attached to the root logger."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler in before:
            continue
        if isinstance(handler, logging.FileHandler) or type(handler) is logging.StreamHandler:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
    for handler in logging_config.KEY_LOGGER.handlers:
        handler.close()
    logging_config.KEY_LOGGER.handlers = []


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert {type(h).__name__ for h in root.handlers} == {"RotatingFileHandler"}
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "rawscreen.log").exists()


def test_console_handler_is_opt_in(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({})
    assert not any(type(h) is logging.StreamHandler for h in logging.getLogger().handlers)

    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "ERROR"}})
    consoles = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
    assert len(consoles) == 1
    assert consoles[0].level == logging.ERROR


def test_key_trace_disabled_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RAWSCREEN_KEYTRACE", raising=False)
    logging_config.setup_logging({})
    assert logging_config.KEY_LOGGER.disabled
    assert not logging_config.KEY_LOGGER.propagate


def test_key_trace_enabled_by_env(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RAWSCREEN_KEYTRACE", "yes")
    logging_config.setup_logging({})
    assert not logging_config.KEY_LOGGER.disabled
    logging_config.KEY_LOGGER.debug("key 65 (A)")
    for handler in logging_config.KEY_LOGGER.handlers:
        handler.flush()
    assert "key 65 (A)" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
