"""Shared helpers for Court Pairing."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
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

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "COURTPAIRING_LOG_LEVEL"

_package_logger_configured = False


def _configure_package_logger() -> None:
    """Attach a single stream handler to the package root logger."""
    global _package_logger_configured
    if _package_logger_configured:
        return

    root = logging.getLogger("courtpairing")
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    _package_logger_configured = True


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the package logging configuration.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    _configure_package_logger()
    return logging.getLogger(name)
