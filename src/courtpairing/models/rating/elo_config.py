"""EloConfig data class."""

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

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

from courtpairing.constants import (
    DEFAULT_COURT_MODIFIERS,
    DEFAULT_ELO_CEILING,
    DEFAULT_ELO_FLOOR,
    DEFAULT_K_FACTOR,
    DEFAULT_MAX_ELO_GAIN,
    DEFAULT_MAX_ELO_LOSS,
    DEFAULT_STARTING_ELO,
)
from courtpairing.exceptions import InvalidConfigurationException


@dataclass(frozen=True)
class EloConfig:
    """Resolved Elo settings for one club and format.

    Attributes
    ----------
    k_factor : float
        Rating volatility, must be positive.
    court_modifiers : mapping of str to float
        Multiplier applied to the delta for a court role tag, e.g.
        "winners-court". Unknown tags use 1.0.
    starting_elo : float
        Rating given to new players.
    elo_floor, elo_ceiling : float
        Bounds a stored rating is clamped to.
    max_gain_per_match, max_loss_per_match : float
        Bounds on the magnitude of a single applied delta.
    """

    k_factor: float = DEFAULT_K_FACTOR
    court_modifiers: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_COURT_MODIFIERS)
    )
    starting_elo: float = DEFAULT_STARTING_ELO
    elo_floor: float = DEFAULT_ELO_FLOOR
    elo_ceiling: float = DEFAULT_ELO_CEILING
    max_gain_per_match: float = DEFAULT_MAX_ELO_GAIN
    max_loss_per_match: float = DEFAULT_MAX_ELO_LOSS

    def __post_init__(self):
        if self.k_factor <= 0:
            raise InvalidConfigurationException(
                f"K-factor must be positive, got {self.k_factor}"
            )
        if self.elo_floor > self.elo_ceiling:
            raise InvalidConfigurationException("Elo floor is above the ceiling")
        # Read-only copy so callers cannot mutate a shared config
        object.__setattr__(
            self, "court_modifiers", MappingProxyType(dict(self.court_modifiers))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "kFactor": self.k_factor,
            "courtModifiers": dict(self.court_modifiers),
            "startingElo": self.starting_elo,
            "eloFloor": self.elo_floor,
            "eloCeiling": self.elo_ceiling,
            "maxEloGainPerMatch": self.max_gain_per_match,
            "maxEloLossPerMatch": self.max_loss_per_match,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EloConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            k_factor=float(data.get("kFactor", DEFAULT_K_FACTOR)),
            court_modifiers=dict(data.get("courtModifiers", DEFAULT_COURT_MODIFIERS)),
            starting_elo=float(data.get("startingElo", DEFAULT_STARTING_ELO)),
            elo_floor=float(data.get("eloFloor", DEFAULT_ELO_FLOOR)),
            elo_ceiling=float(data.get("eloCeiling", DEFAULT_ELO_CEILING)),
            max_gain_per_match=float(data.get("maxEloGainPerMatch", DEFAULT_MAX_ELO_GAIN)),
            max_loss_per_match=float(data.get("maxEloLossPerMatch", DEFAULT_MAX_ELO_LOSS)),
        )
