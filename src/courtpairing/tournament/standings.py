"""Event leaderboard aggregation.

This module collects per-player totals over the decided courts of an event
and ranks players for the nightly leaderboard.
"""

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
from typing import Any, Dict, List, Mapping, Optional, Sequence

from courtpairing.constants import (
    DEFAULT_STANDINGS_ORDER,
    SORT_GAME_DIFFERENCE,
    SORT_GAMES_PLAYED,
    SORT_GAMES_WON,
    SORT_RATING,
    SORT_TOTAL_POINTS,
)
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId, Ratings, RoundPoints
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class PlayerStanding:
    """Leaderboard row for one player.

    Attributes
    ----------
    player_id : str
    total_points : int
        Leaderboard points summed over all rounds.
    games_played, games_won, games_lost : int
        Match counts over decided courts.
    games_for, games_against : int
        Games scored by and against the player's teams.
    rating : float or None
        Current rating when known, used as the last tiebreak.
    rank : int
        1-based leaderboard position.
    """

    player_id: PlayerId
    total_points: int = 0
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_for: int = 0
    games_against: int = 0
    rating: Optional[float] = None
    rank: int = 0

    @property
    def game_difference(self) -> int:
        return self.games_for - self.games_against

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "rank": self.rank,
            "totalPoints": self.total_points,
            "gamesPlayed": self.games_played,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "gamesFor": self.games_for,
            "gamesAgainst": self.games_against,
            "gameDifference": self.game_difference,
            "winRate": self.win_rate,
            "rating": self.rating,
        }


def _sort_key(standing: PlayerStanding, order: Sequence[str]):
    # Descending on everything except games played, where fewer is better
    values = {
        SORT_TOTAL_POINTS: -standing.total_points,
        SORT_GAMES_WON: -standing.games_won,
        SORT_GAME_DIFFERENCE: -standing.game_difference,
        SORT_GAMES_PLAYED: standing.games_played,
        SORT_RATING: -(standing.rating or 0.0),
    }
    return tuple(values[key] for key in order) + (standing.player_id,)


def compute_standings(
    rounds: Sequence[RoundState],
    round_points: Mapping[int, RoundPoints],
    ratings: Optional[Ratings] = None,
    order: Optional[Sequence[str]] = None,
) -> List[PlayerStanding]:
    """Rank every player who appears in ``rounds``.

    Args:
        rounds: Event rounds; pending courts are skipped
        round_points: Points awarded per round number, player id to points
        ratings: Optional current ratings for the final tiebreak
        order: Sort keys, defaults to ``DEFAULT_STANDINGS_ORDER``

    Returns:
        Standings sorted best first with ``rank`` assigned
    """
    if order is None:
        order = DEFAULT_STANDINGS_ORDER
    table: Dict[PlayerId, PlayerStanding] = {}

    def row(pid: PlayerId) -> PlayerStanding:
        if pid not in table:
            table[pid] = PlayerStanding(player_id=pid)
        return table[pid]

    for round_state in rounds:
        for court in round_state.courts:
            for pid in court.players:
                row(pid)
            if not court.is_decided:
                continue
            a_won = court.team_a_won
            for team, won, scored, conceded in (
                (court.team_a, a_won, court.score_a, court.score_b),
                (court.team_b, not a_won, court.score_b, court.score_a),
            ):
                for pid in team:
                    standing = row(pid)
                    standing.games_played += 1
                    standing.games_won += int(won)
                    standing.games_lost += int(not won)
                    standing.games_for += scored
                    standing.games_against += conceded

    for points in round_points.values():
        for pid, value in points.items():
            row(pid).total_points += value

    if ratings:
        for pid, standing in table.items():
            standing.rating = ratings.get(pid)

    standings = sorted(table.values(), key=lambda s: _sort_key(s, order))
    for rank, standing in enumerate(standings, start=1):
        standing.rank = rank
    logger.debug(f"Computed standings for {len(standings)} players")
    return standings
