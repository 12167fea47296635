"""Shared helpers for Court Shuffle."""

# Court Shuffle
# Copyright (C) 2025  Court Shuffle developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
from typing import Union

from courtshuffle.constants import LOG_LEVEL_ENV

PACKAGE_LOGGER = "courtshuffle"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _package_logger() -> logging.Logger:
    """Return the package logger, attaching its handler on first use."""
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())
    return root


def setup_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A logger under the ``courtshuffle`` namespace
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[int, str]) -> None:
    """Set the level of every Court Shuffle logger."""
    if isinstance(level, str):
        level = level.upper()
    _package_logger().setLevel(level)


__all__ = ["configure_logging", "setup_logger"]
