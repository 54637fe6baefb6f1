from __future__ import annotations

import logging

import pytest

from tms_console.utils.logging import apply_gui_preferences, configure_root, env_forces_debug
from tms_console.viewmodels.settings_vm import SettingsVM


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TMS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TMS_DEBUG", raising=False)
    root = logging.getLogger()
    saved = root.level
    yield monkeypatch
    root.setLevel(saved)


def test_settings_toggle_decides_without_env() -> None:
    assert apply_gui_preferences(True) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert apply_gui_preferences(False) == logging.INFO
    assert not env_forces_debug()


def test_log_level_env_overrides_toggle(clean_env) -> None:
    clean_env.setenv("TMS_LOG_LEVEL", "warning")

    assert apply_gui_preferences(True) == logging.WARNING
    assert configure_root(logging.DEBUG) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_numeric_log_level_is_accepted(clean_env) -> None:
    clean_env.setenv("TMS_LOG_LEVEL", "15")

    assert configure_root() == 15
    assert env_forces_debug() is False


def test_debug_flag_forces_debug(clean_env) -> None:
    clean_env.setenv("TMS_DEBUG", "yes")

    assert apply_gui_preferences(False) == logging.DEBUG
    assert env_forces_debug() is True


def test_unknown_level_name_falls_back_to_default(clean_env) -> None:
    clean_env.setenv("TMS_LOG_LEVEL", "chatty")

    assert configure_root(logging.ERROR) == logging.ERROR


def test_debug_env_turns_on_settings_default(clean_env) -> None:
    clean_env.setenv("TMS_DEBUG", "1")

    assert SettingsVM().debug_logging is True
