"""Mini README: Application-wide logging helpers for Moneyflow.

Structure:
    * get_logger - factory returning module loggers with baseline setup.
    * configure_root_logger - installs the shared handler and level once.

Usage:
    Modules call ``get_logger(__name__)`` at import time and keep the result
    in a module-level ``LOGGER``. The CLI calls ``configure_root_logger`` with
    the configured level before serving so the level applies everywhere.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Install the shared handler on first use; later calls only adjust the level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if _LOGGER_INITIALISED:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Hand out ``logging.getLogger(name)`` once the root handler exists."""

    configure_root_logger()
    return logging.getLogger(name)
