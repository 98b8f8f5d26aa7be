"""Americano rotating-partner scheduling.

Players change partners every round. With one player more than the courts
can hold, a rotating rest slot sits one player out per round. Pairings come
from a bounded depth-first search: partnerships and four-player groupings
seen within the anti-repeat window are avoided outright when possible, and
otherwise the least recently used repeats are accepted. Among equally good
schedules the one that spreads partners and opponents most evenly wins.
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

import heapq
from itertools import combinations
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from courtpairing.constants import (
    AMERICANO_SEARCH_BUDGET,
    FORMAT_AMERICANO,
    PLAYERS_PER_COURT,
)
from courtpairing.exceptions import NoPairingAvailable
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.engine_options import EngineOptions
from courtpairing.models.tournament.pairing_history import PairingHistory
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import CourtPairing, CourtPairings, PlayerId, Roster
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

# (repeat penalty, balance cost)
Cost = Tuple[int, int]
Pair = Tuple[PlayerId, PlayerId]


def roster_from_rounds(rounds: Sequence[RoundState]) -> List[PlayerId]:
    """Players in order of first appearance across ``rounds``."""
    seen: Dict[PlayerId, None] = {}
    for round_state in rounds:
        for pid in round_state.players:
            seen.setdefault(pid, None)
    return list(seen)


def select_resting_players(
    roster: Sequence[PlayerId],
    num_courts: int,
    history: PairingHistory,
    last_round_num: int,
) -> List[PlayerId]:
    """Choose who sits out so the rest of the roster fills ``num_courts``.

    Candidates are ordered by fewest rests so far, then most games played,
    then roster order. A player who rested in ``last_round_num`` only rests
    again when nobody else can.
    """
    surplus = len(roster) - num_courts * PLAYERS_PER_COURT
    if surplus <= 0:
        return []

    order = {pid: idx for idx, pid in enumerate(roster)}

    def rest_key(pid: PlayerId):
        return (
            history.rested_in(pid, last_round_num),
            history.rest_count(pid),
            -history.games_played.get(pid, 0),
            order[pid],
        )

    return sorted(roster, key=rest_key)[:surplus]


class _PairingSearch:
    """Depth-first court assignment with branch and bound.

    Courts are filled one at a time. The anchor of each court is the first
    unassigned player; partner and opponent candidates are tried cheapest
    first. The search stops at the first schedule free of repeats. Until
    then branches are pruned against the best cost found, and once the
    node budget is spent the best schedule so far is kept.
    """

    def __init__(
        self,
        players: Sequence[PlayerId],
        history: PairingHistory,
        next_round_num: int,
        window: int,
        budget: int = AMERICANO_SEARCH_BUDGET,
    ):
        self.players = list(players)
        self.history = history
        self.next_round_num = next_round_num
        self.window = window
        self.budget = budget
        self.nodes = 0
        self.best: Optional[CourtPairings] = None
        self.best_cost: Optional[Cost] = None
        self._pair_costs: Dict[frozenset, Cost] = {
            frozenset((p1, p2)): (
                history.partner_penalty(p1, p2, next_round_num, window),
                2 * history.partner_count(p1, p2),
            )
            for p1, p2 in combinations(self.players, 2)
        }
        # Stable sort keeps roster order among equal costs
        self._ranked_pairs: List[Pair] = sorted(
            combinations(self.players, 2), key=lambda pair: self._partner_cost(*pair)
        )

    @property
    def found_clean(self) -> bool:
        return self.best_cost is not None and self.best_cost[0] == 0

    def _partner_cost(self, p1: PlayerId, p2: PlayerId) -> Cost:
        return self._pair_costs[frozenset((p1, p2))]

    def _court_cost(self, team_a, team_b) -> Cost:
        cost_a = self._partner_cost(*team_a)
        cost_b = self._partner_cost(*team_b)
        group = self.history.group_penalty(
            team_a + team_b, self.next_round_num, self.window
        )
        opponents = sum(
            self.history.opponent_count(home, away)
            for home in team_a
            for away in team_b
        )
        return (
            cost_a[0] + cost_b[0] + group,
            cost_a[1] + cost_b[1] + opponents,
        )

    def _lower_bound(self, team_a: Pair, team_b: Pair) -> Cost:
        cost_a = self._partner_cost(*team_a)
        cost_b = self._partner_cost(*team_b)
        return (cost_a[0] + cost_b[0], cost_a[1] + cost_b[1])

    @staticmethod
    def _next_opponents(opponents: List[Pair], partner: PlayerId, start: int) -> Optional[int]:
        for col in range(start, len(opponents)):
            if partner not in opponents[col]:
                return col
        return None

    def _candidates(
        self, anchor: PlayerId, pairs: List[Pair]
    ) -> Iterator[Tuple[Cost, CourtPairing]]:
        """Yield the courts ``anchor`` can head, cheapest first.

        ``pairs`` holds the unassigned pairs ranked by partner cost. A court
        never costs less than its two partner costs, so courts are merged
        lazily on that bound and each is yielded once its exact cost is the
        smallest left.
        """
        partners = [pair for pair in pairs if anchor in pair]
        opponents = [pair for pair in pairs if anchor not in pair]

        # (cost, pending, row, col, partner); pending entries hold a bound
        heap = []
        for row, pair in enumerate(partners):
            partner = pair[1] if pair[0] == anchor else pair[0]
            col = self._next_opponents(opponents, partner, 0)
            if col is not None:
                team_a = (anchor, partner)
                heap.append((self._lower_bound(team_a, opponents[col]), 1, row, col, partner))
        heapq.heapify(heap)

        while heap:
            cost, pending, row, col, partner = heapq.heappop(heap)
            team_a = (anchor, partner)
            team_b = opponents[col]
            if not pending:
                yield cost, (team_a, team_b)
                continue
            heapq.heappush(heap, (self._court_cost(team_a, team_b), 0, row, col, partner))
            col = self._next_opponents(opponents, partner, col + 1)
            if col is not None:
                heapq.heappush(
                    heap, (self._lower_bound(team_a, opponents[col]), 1, row, col, partner)
                )

    def run(self) -> Optional[CourtPairings]:
        self._search(self.players, self._ranked_pairs, [], (0, 0))
        logger.debug(
            f"Americano search for round {self.next_round_num}: {self.nodes} nodes, "
            f"best cost {self.best_cost}"
        )
        return self.best

    def _search(
        self,
        remaining: List[PlayerId],
        pairs: List[Pair],
        courts: CourtPairings,
        cost: Cost,
    ) -> None:
        if not remaining:
            if self.best_cost is None or cost < self.best_cost:
                self.best = list(courts)
                self.best_cost = cost
            return

        for court_cost, (team_a, team_b) in self._candidates(remaining[0], pairs):
            if self.nodes >= self.budget and self.best is not None:
                return
            total = (cost[0] + court_cost[0], cost[1] + court_cost[1])
            if self.best_cost is not None and total >= self.best_cost:
                # Candidates arrive cheapest first, so later ones cannot do better
                return
            self.nodes += 1
            placed = set(team_a + team_b)
            courts.append((team_a, team_b))
            self._search(
                [p for p in remaining if p not in placed],
                [pair for pair in pairs if placed.isdisjoint(pair)],
                courts,
                total,
            )
            courts.pop()
            if self.found_clean:
                return


class AmericanoScheduler:
    """Scheduler for the rotating-partner Americano format."""

    format = FORMAT_AMERICANO

    def __init__(self, search_budget: int = AMERICANO_SEARCH_BUDGET):
        self.search_budget = search_budget

    def roster(
        self,
        current: RoundState,
        lookback: Sequence[RoundState],
        options: EngineOptions,
    ) -> Roster:
        if options.players is not None:
            return list(options.players)
        return roster_from_rounds(lookback)

    def schedule(
        self,
        current: RoundState,
        lookback: Sequence[RoundState],
        options: EngineOptions,
    ) -> RoundState:
        """Build the next Americano round.

        Args:
            current: The round just played (scores are not required)
            lookback: Previous rounds oldest first, ending with ``current``
            options: Scheduling options

        Returns:
            The next round with the same number of courts as ``current``

        Raises:
            NoPairingAvailable: If the roster cannot fill the courts
        """
        num_courts = current.num_courts
        next_num = current.round_num + 1
        window = options.anti_repeat_window
        roster = self.roster(current, lookback, options)

        history = PairingHistory.from_rounds(lookback, roster)
        resting = select_resting_players(roster, num_courts, history, current.round_num)
        playing = [pid for pid in roster if pid not in resting]
        if len(playing) != num_courts * PLAYERS_PER_COURT:
            raise NoPairingAvailable(
                f"{len(playing)} players cannot fill {num_courts} court(s)"
            )

        search = _PairingSearch(playing, history, next_num, window, self.search_budget)
        pairings = search.run()
        if pairings is None:
            raise NoPairingAvailable(f"No Americano pairing found for round {next_num}")

        if search.best_cost[0] > 0:
            logger.warning(
                f"Round {next_num}: no pairing avoids every repeat within "
                f"{window} round(s), using least recent repeats"
            )

        courts = tuple(
            CourtMatch(court_num=idx, team_a=team_a, team_b=team_b)
            for idx, (team_a, team_b) in enumerate(pairings, start=1)
        )
        logger.info(
            f"Americano round {next_num} scheduled on {num_courts} court(s), "
            f"resting: {', '.join(resting) or 'none'}"
        )
        return RoundState(round_num=next_num, courts=courts)
