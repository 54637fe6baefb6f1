"""Root logger setup for the console.

``TMS_LOG_LEVEL`` (a level name or number) wins over everything else; a truthy
``TMS_DEBUG`` forces DEBUG. Without either, the caller's default or the
settings toggle decides.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "TMS_LOG_LEVEL"
DEBUG_ENV = "TMS_DEBUG"


def _parse_level(text: Optional[str]) -> Optional[int]:
    text = (text or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    level = _parse_level(os.getenv(LEVEL_ENV))
    if level is not None:
        return level
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def env_forces_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


def configure_root(default_level: int = logging.INFO) -> int:
    """Install the compact handler on the root logger and return the level used."""
    level = env_level()
    if level is None:
        level = default_level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(level)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Follow the settings debug toggle unless the environment pins a level."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level
