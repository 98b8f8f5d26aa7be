"""EngineOptions and AdvancePolicy data classes."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from courtpairing.constants import (
    DEFAULT_ANTI_REPEAT_WINDOW,
    DEFAULT_FORMAT,
    SUPPORTED_FORMATS,
    WILDCARD_INTENSITIES,
    WILDCARD_LIGHT,
)
from courtpairing.exceptions import InvalidConfigurationException, UnsupportedFormat
from courtpairing.type_hints import PlayerId


def _check_window(window: int) -> None:
    if not isinstance(window, int) or isinstance(window, bool) or window < 0:
        raise InvalidConfigurationException(
            f"Anti-repeat window must be a non-negative integer, got {window!r}"
        )


def _check_format(format: str) -> None:
    if format not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(format)


@dataclass(frozen=True)
class EngineOptions:
    """Scheduling options for one ``next_round`` call.

    Attributes
    ----------
    anti_repeat_window : int
        Number of trailing rounds consulted when penalizing repeat pairings.
        0 disables the constraint.
    format : str
        Tournament format tag, "americano" or "winners-court".
    players : tuple of str or None
        Full Americano roster in seed order, including resting players.
        When None the roster is read from the round history.
    """

    anti_repeat_window: int = DEFAULT_ANTI_REPEAT_WINDOW
    format: str = DEFAULT_FORMAT
    players: Optional[Tuple[PlayerId, ...]] = None

    def __post_init__(self):
        _check_window(self.anti_repeat_window)
        _check_format(self.format)
        if self.players is not None:
            object.__setattr__(self, "players", tuple(self.players))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize options to dictionary."""
        return {
            "antiRepeatWindow": self.anti_repeat_window,
            "format": self.format,
            "players": list(self.players) if self.players is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineOptions":
        """Deserialize options from dictionary."""
        players = data.get("players")
        return cls(
            anti_repeat_window=data.get("antiRepeatWindow", DEFAULT_ANTI_REPEAT_WINDOW),
            format=data.get("format", DEFAULT_FORMAT),
            players=tuple(players) if players is not None else None,
        )


@dataclass(frozen=True)
class WildcardPolicy:
    """Wildcard settings for a single round advance."""

    active: bool = False
    intensity: str = WILDCARD_LIGHT

    def __post_init__(self):
        if self.intensity not in WILDCARD_INTENSITIES:
            raise InvalidConfigurationException(
                f"Unknown wildcard intensity: {self.intensity!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"active": self.active, "intensity": self.intensity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WildcardPolicy":
        return cls(
            active=bool(data.get("active", False)),
            intensity=data.get("intensity", WILDCARD_LIGHT),
        )


@dataclass(frozen=True)
class AdvancePolicy:
    """Policy for advancing an event by one round.

    Attributes
    ----------
    anti_repeat_window : int
        Passed through to the scheduler.
    wildcard : WildcardPolicy or None
        Optional wildcard perturbation applied after scheduling.
    format : str
        Tournament format tag.
    players : tuple of str or None
        Americano roster, see ``EngineOptions.players``.
    """

    anti_repeat_window: int = DEFAULT_ANTI_REPEAT_WINDOW
    wildcard: Optional[WildcardPolicy] = None
    format: str = DEFAULT_FORMAT
    players: Optional[Tuple[PlayerId, ...]] = None

    def __post_init__(self):
        _check_window(self.anti_repeat_window)
        _check_format(self.format)
        if self.players is not None:
            object.__setattr__(self, "players", tuple(self.players))

    @property
    def wildcard_active(self) -> bool:
        return self.wildcard is not None and self.wildcard.active

    def engine_options(self) -> EngineOptions:
        """Options handed to the scheduler."""
        return EngineOptions(
            anti_repeat_window=self.anti_repeat_window,
            format=self.format,
            players=self.players,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize policy to dictionary."""
        return {
            "antiRepeatWindow": self.anti_repeat_window,
            "wildcard": self.wildcard.to_dict() if self.wildcard else None,
            "format": self.format,
            "players": list(self.players) if self.players is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvancePolicy":
        """Deserialize policy from dictionary."""
        wildcard = data.get("wildcard")
        players = data.get("players")
        return cls(
            anti_repeat_window=data.get("antiRepeatWindow", DEFAULT_ANTI_REPEAT_WINDOW),
            wildcard=WildcardPolicy.from_dict(wildcard) if wildcard else None,
            format=data.get("format", DEFAULT_FORMAT),
            players=tuple(players) if players is not None else None,
        )
