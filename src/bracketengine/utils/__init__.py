"""Shared utilities for Bracket Engine."""

# Bracket Engine
# Copyright (C) 2025  Bracket Engine developers
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
from typing import Optional

from bracketengine.constants import DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_LEVEL_ENV_VAR

_ROOT_LOGGER_NAME = "bracketengine"


def _configure_root(level: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    level_name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    return root


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger attached to the package root logger.

    The root handler is installed once; its level comes from ``level``, the
    ``BRACKETENGINE_LOG_LEVEL`` environment variable, or ``WARNING``.

    Args:
        name: Usually ``__name__`` of the calling module
        level: Optional level name overriding the environment

    Returns:
        Configured logger
    """
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if level is not None or not root.handlers:
        _configure_root(level)
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
