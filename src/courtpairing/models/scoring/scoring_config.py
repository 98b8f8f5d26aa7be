"""ScoringConfig and RoundOutcome data classes."""

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
from typing import Any, Dict, Optional

from courtpairing.constants import (
    AM_BASE_WIN_POINTS,
    AM_MARGIN_BONUS_POINTS,
    AM_MARGIN_BONUS_THRESHOLD,
    AM_MAX_POINTS_PER_MATCH,
    WC_BASE_WIN_POINTS,
    WC_DEFEND_BONUS_POINTS,
    WC_DEFEND_BONUS_START_ROUND,
    WC_MARGIN_BONUS_POINTS,
    WC_MARGIN_BONUS_THRESHOLD,
    WC_MAX_POINTS_PER_MATCH,
)
from courtpairing.exceptions import InvalidConfigurationException


@dataclass(frozen=True)
class ScoringConfig:
    """Leaderboard points settings for one format.

    Attributes
    ----------
    base_win_points : int
        Points for any win.
    margin_bonus_threshold : int
        Minimum winning margin that earns the margin bonus.
    margin_bonus_points : int
        Points added for a win by at least the threshold.
    max_points_per_match : int
        Cap applied to the summed total.
    defend_bonus_points : int
        Points for successfully defending the top court.
    defend_bonus_start_round : int or None
        First round in which the defend bonus is awarded, None to disable.
    promotion_bonus_points : int
        Points for a win that promotes the team to a higher court.
    """

    base_win_points: int = WC_BASE_WIN_POINTS
    margin_bonus_threshold: int = WC_MARGIN_BONUS_THRESHOLD
    margin_bonus_points: int = WC_MARGIN_BONUS_POINTS
    max_points_per_match: int = WC_MAX_POINTS_PER_MATCH
    defend_bonus_points: int = WC_DEFEND_BONUS_POINTS
    defend_bonus_start_round: Optional[int] = WC_DEFEND_BONUS_START_ROUND
    promotion_bonus_points: int = 0

    def __post_init__(self):
        if self.margin_bonus_threshold < 1:
            raise InvalidConfigurationException(
                "Margin bonus threshold must be at least 1"
            )
        if self.max_points_per_match < 0:
            raise InvalidConfigurationException(
                "Max points per match cannot be negative"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "baseWinPoints": self.base_win_points,
            "marginBonusThreshold": self.margin_bonus_threshold,
            "marginBonusPoints": self.margin_bonus_points,
            "maxPointsPerMatch": self.max_points_per_match,
            "winnersCourtBonusPoints": self.defend_bonus_points,
            "winnersCourtBonusStartRound": self.defend_bonus_start_round,
            "promotionBonusPoints": self.promotion_bonus_points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            base_win_points=data.get("baseWinPoints", WC_BASE_WIN_POINTS),
            margin_bonus_threshold=data.get(
                "marginBonusThreshold", WC_MARGIN_BONUS_THRESHOLD
            ),
            margin_bonus_points=data.get("marginBonusPoints", WC_MARGIN_BONUS_POINTS),
            max_points_per_match=data.get("maxPointsPerMatch", WC_MAX_POINTS_PER_MATCH),
            defend_bonus_points=data.get(
                "winnersCourtBonusPoints", WC_DEFEND_BONUS_POINTS
            ),
            defend_bonus_start_round=data.get(
                "winnersCourtBonusStartRound", WC_DEFEND_BONUS_START_ROUND
            ),
            promotion_bonus_points=data.get("promotionBonusPoints", 0),
        )


WINNERS_COURT_SCORING = ScoringConfig()

AMERICANO_SCORING = ScoringConfig(
    base_win_points=AM_BASE_WIN_POINTS,
    margin_bonus_threshold=AM_MARGIN_BONUS_THRESHOLD,
    margin_bonus_points=AM_MARGIN_BONUS_POINTS,
    max_points_per_match=AM_MAX_POINTS_PER_MATCH,
    defend_bonus_points=0,
    defend_bonus_start_round=None,
)


@dataclass(frozen=True)
class RoundOutcome:
    """A single player's result for one round.

    Attributes
    ----------
    won : bool
        Whether the player's team won.
    court : int
        Court the round was played on.
    point_diff : int
        Signed margin for the player's team.
    defended_c1 : bool
        Won on the top court while holding it.
    promoted : bool
        Won and moves up a court.
    """

    won: bool
    court: int
    point_diff: int
    defended_c1: bool = False
    promoted: bool = False
