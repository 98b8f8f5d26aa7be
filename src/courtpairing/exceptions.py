"""Exceptions for use in Court Pairing"""

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

from typing import Optional, Sequence


# ========== Base Application Exception ==========


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all engine errors with a single except clause.
    """

    pass


# ========== Scheduling Exceptions ==========


class SchedulingException(CourtPairingException):
    """Base exception for round scheduling errors."""

    pass


class InvalidRosterSize(SchedulingException):
    """Raised when the active player count cannot fill the configured courts."""

    def __init__(
        self,
        message: str,
        count: Optional[int] = None,
        format: Optional[str] = None,
        num_courts: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.count = count
        self.format = format
        self.num_courts = num_courts


class IncompleteRound(SchedulingException):
    """Raised when a round that must be decided still has pending courts."""

    def __init__(self, round_num: int, pending_courts: Sequence[int]):
        self.round_num = round_num
        self.pending_courts = tuple(pending_courts)
        courts = ", ".join(str(c) for c in self.pending_courts)
        super().__init__(f"Round {round_num} has no score for court(s) {courts}")


class MalformedRoundState(SchedulingException):
    """Raised when a round violates the structural invariants of the data model."""

    pass


class NoPairingAvailable(SchedulingException):
    """Raised when no valid court assignment can be generated."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPairingException):
    """Base exception for configuration errors."""

    pass


class UnsupportedFormat(ConfigurationException):
    """Raised when a tournament format has no registered scheduler."""

    def __init__(self, format: str):
        self.format = format
        super().__init__(f"Unsupported tournament format: {format!r}")


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Base exception for validation errors."""

    pass


class ScheduleValidationException(ValidationException):
    """Raised when a checked event history has absolute violations."""

    pass
