"""Mini README: Application-wide logging helpers for the expense tracker.

Structure:
    * configure_root_logger - installs the tracker's handler once and applies levels.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules call ``get_logger(__name__)`` at import time, which installs a
    single stream handler at INFO. The CLI later calls
    ``configure_root_logger(settings.log_level)``; an explicit level always
    replaces the current root level, while the handler is only ever added
    once, even when uvicorn reloads the application.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

HANDLER_NAME = "daily_expenses"
DEFAULT_LEVEL = logging.INFO


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _tracker_handler(root_logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in root_logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the tracker's stream handler and optionally set the root level.

    Without ``level`` the first call sets ``DEFAULT_LEVEL`` and later calls
    leave the level alone.
    """

    root_logger = logging.getLogger()
    if _tracker_handler(root_logger) is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(handler)
        if level is None:
            level = DEFAULT_LEVEL

    if level is not None:
        root_logger.setLevel(_resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
