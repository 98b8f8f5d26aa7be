"""Court match data class."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from courtpairing.type_hints import PlayerId, Team


@dataclass(frozen=True)
class CourtMatch:
    """Represents one court in a round: two teams of two and their scores.

    Attributes
    ----------
    court_num : int
        Court number, 1 being the top court.
    team_a : tuple of str
        Ordered pair of player IDs on team A.
    team_b : tuple of str
        Ordered pair of player IDs on team B.
    score_a : int or None
        Games won by team A, None while the court is pending.
    score_b : int or None
        Games won by team B, None while the court is pending.
    """

    court_num: int
    team_a: Team
    team_b: Team
    score_a: Optional[int] = None
    score_b: Optional[int] = None

    def __post_init__(self):
        # Accept lists from callers and JSON payloads
        object.__setattr__(self, "team_a", tuple(self.team_a))
        object.__setattr__(self, "team_b", tuple(self.team_b))

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        """All four players, team A first."""
        return self.team_a + self.team_b

    @property
    def is_decided(self) -> bool:
        """True once both scores have been entered."""
        return self.score_a is not None and self.score_b is not None

    @property
    def team_a_won(self) -> bool:
        """Whether team A won; a tie counts as a team A win."""
        return (self.score_a or 0) >= (self.score_b or 0)

    @property
    def winners(self) -> Team:
        return self.team_a if self.team_a_won else self.team_b

    @property
    def losers(self) -> Team:
        return self.team_b if self.team_a_won else self.team_a

    @property
    def margin(self) -> int:
        """Absolute score difference, 0 for a pending court."""
        if not self.is_decided:
            return 0
        return abs(self.score_a - self.score_b)

    def team_of(self, player_id: PlayerId) -> Optional[Team]:
        """Return the team containing ``player_id`` or None."""
        if player_id in self.team_a:
            return self.team_a
        if player_id in self.team_b:
            return self.team_b
        return None

    def with_scores(self, score_a: int, score_b: int) -> "CourtMatch":
        """Return a copy of this court with scores entered."""
        return replace(self, score_a=score_a, score_b=score_b)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize court match to dictionary."""
        return {
            "court_num": self.court_num,
            "teamA": list(self.team_a),
            "teamB": list(self.team_b),
            "scoreA": self.score_a,
            "scoreB": self.score_b,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CourtMatch":
        """Deserialize court match from dictionary."""
        return cls(
            court_num=int(data["court_num"]),
            team_a=tuple(data["teamA"]),
            team_b=tuple(data["teamB"]),
            score_a=data.get("scoreA"),
            score_b=data.get("scoreB"),
        )
