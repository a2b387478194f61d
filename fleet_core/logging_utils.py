"""Application-wide logging helpers for the fleet manager.

Structure:
    * get_logger - returns a module logger under the ``fleet_core`` / ``fleet_manager`` names.
    * configure_root_logger - installs the console handler once and sets the level.

Log records go to stderr so they never interleave with the menu output on
stdout. The handler is installed exactly once per process; repeated calls only
adjust the level.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

DEFAULT_LEVEL = logging.WARNING

_LOGGER_INITIALISED = False


def resolve_level(level: Union[int, str, None]) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""

    if level is None:
        return DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    return numeric


def configure_root_logger(level: Union[int, str, None] = DEFAULT_LEVEL) -> None:
    """Configure the root logger with a compact, debugging friendly formatter."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""

    return logging.getLogger(name)
