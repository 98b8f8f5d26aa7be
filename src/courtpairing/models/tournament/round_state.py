"""Data model for tournament round."""

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
from typing import Any, Dict, List, Optional, Tuple

from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.type_hints import CourtAssignment, PlayerId


@dataclass(frozen=True)
class RoundState:
    """Container for the court assignments of a single round.

    Attributes
    ----------
    round_num : int
        Round number (1-indexed).
    courts : tuple of CourtMatch
        Courts ordered by ascending court number.
    """

    round_num: int
    courts: Tuple[CourtMatch, ...] = ()

    def __post_init__(self):
        ordered = tuple(sorted(self.courts, key=lambda ct: ct.court_num))
        object.__setattr__(self, "courts", ordered)

    @property
    def num_courts(self) -> int:
        return len(self.courts)

    @property
    def players(self) -> List[PlayerId]:
        """Players in court order, team A before team B."""
        return [p for court in self.courts for p in court.players]

    @property
    def is_complete(self) -> bool:
        """True when every court has a score."""
        return all(court.is_decided for court in self.courts)

    @property
    def pending_courts(self) -> List[int]:
        return [court.court_num for court in self.courts if not court.is_decided]

    def court_assignment(self) -> CourtAssignment:
        """Map each player to the court they play on."""
        return {p: court.court_num for court in self.courts for p in court.players}

    def court_of(self, player_id: PlayerId) -> Optional[int]:
        """Return the court number of ``player_id`` or None if not playing."""
        for court in self.courts:
            if player_id in court.players:
                return court.court_num
        return None

    def get_court(self, court_num: int) -> Optional[CourtMatch]:
        for court in self.courts:
            if court.court_num == court_num:
                return court
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round state to dictionary."""
        return {
            "roundNum": self.round_num,
            "courts": [court.to_dict() for court in self.courts],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundState":
        """Deserialize round state from dictionary."""
        return cls(
            round_num=int(data["roundNum"]),
            courts=tuple(CourtMatch.from_dict(c) for c in data.get("courts", [])),
        )
