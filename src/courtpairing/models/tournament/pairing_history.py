"""Data models for pairing lookback."""

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
from typing import Dict, Iterable, List, Optional, Sequence

from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to penalize repeat partnerships and courts.

    Built fresh from a round history on every scheduling call, so the
    scheduler never depends on state kept between calls.

    Attributes
    ----------
    partnerships : dict of frozenset to int
        Most recent round number in which two players were teammates.
    partner_counts : dict of frozenset to int
        Number of rounds two players have been teammates.
    groupings : dict of frozenset to int
        Most recent round number in which a four-player group shared a court.
    opponent_counts : dict of frozenset to int
        Number of times two players have faced each other.
    games_played : dict of str to int
        Rounds played per player.
    rest_rounds : dict of str to list of int
        Round numbers in which a rostered player did not play.
    last_round_num : int
        Highest round number recorded, 0 when empty.
    """

    partnerships: Dict[frozenset, int] = field(default_factory=dict)
    partner_counts: Dict[frozenset, int] = field(default_factory=dict)
    groupings: Dict[frozenset, int] = field(default_factory=dict)
    opponent_counts: Dict[frozenset, int] = field(default_factory=dict)
    games_played: Dict[PlayerId, int] = field(default_factory=dict)
    rest_rounds: Dict[PlayerId, List[int]] = field(default_factory=dict)
    last_round_num: int = 0

    @classmethod
    def from_rounds(
        cls, rounds: Iterable[RoundState], roster: Optional[Sequence[PlayerId]] = None
    ) -> "PairingHistory":
        """Build the history of ``rounds`` (oldest first)."""
        history = cls()
        for round_state in rounds:
            history.add_round(round_state, roster)
        return history

    def add_round(
        self, round_state: RoundState, roster: Optional[Sequence[PlayerId]] = None
    ) -> None:
        """Record every pairing of ``round_state``."""
        rnum = round_state.round_num
        playing = set()
        for court in round_state.courts:
            for team in (court.team_a, court.team_b):
                self.add_pairing(team[0], team[1], rnum)
            for home in court.team_a:
                for away in court.team_b:
                    key = frozenset({home, away})
                    self.opponent_counts[key] = self.opponent_counts.get(key, 0) + 1
            self.groupings[frozenset(court.players)] = rnum
            playing.update(court.players)

        for pid in playing:
            self.games_played[pid] = self.games_played.get(pid, 0) + 1
        for pid in roster or ():
            if pid not in playing:
                self.rest_rounds.setdefault(pid, []).append(rnum)

        self.last_round_num = max(self.last_round_num, rnum)

    def add_pairing(self, player1_id: str, player2_id: str, round_num: int) -> None:
        """Record that two players were teammates in ``round_num``."""
        key = frozenset({player1_id, player2_id})
        self.partnerships[key] = max(self.partnerships.get(key, 0), round_num)
        self.partner_counts[key] = self.partner_counts.get(key, 0) + 1

    def last_partnered(self, player1_id: str, player2_id: str) -> Optional[int]:
        return self.partnerships.get(frozenset({player1_id, player2_id}))

    def partner_count(self, player1_id: str, player2_id: str) -> int:
        return self.partner_counts.get(frozenset({player1_id, player2_id}), 0)

    def opponent_count(self, player1_id: str, player2_id: str) -> int:
        return self.opponent_counts.get(frozenset({player1_id, player2_id}), 0)

    @staticmethod
    def recency_penalty(last_round: Optional[int], next_round_num: int, window: int) -> int:
        """Rank a repeat inside the window, 0 when outside it.

        The most recent round in the window scores ``window``, the oldest
        scores 1, so minimizing the penalty picks the least recently used
        pairing.
        """
        if window <= 0 or last_round is None:
            return 0
        oldest_in_window = next_round_num - window
        if last_round < oldest_in_window:
            return 0
        return last_round - oldest_in_window + 1

    def partner_penalty(
        self, player1_id: str, player2_id: str, next_round_num: int, window: int
    ) -> int:
        return self.recency_penalty(
            self.last_partnered(player1_id, player2_id), next_round_num, window
        )

    def group_penalty(
        self, players: Iterable[PlayerId], next_round_num: int, window: int
    ) -> int:
        return self.recency_penalty(
            self.groupings.get(frozenset(players)), next_round_num, window
        )

    def rest_count(self, player_id: PlayerId) -> int:
        return len(self.rest_rounds.get(player_id, ()))

    def rested_in(self, player_id: PlayerId, round_num: int) -> bool:
        return round_num in self.rest_rounds.get(player_id, ())
