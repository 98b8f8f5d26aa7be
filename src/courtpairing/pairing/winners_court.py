"""Winner's Court ladder scheduling.

Winners move up a court and losers move down. Court 1 is the Winners
Court: its winners stay and are joined by the winners of court 2. The
bottom court keeps its losers and receives the losers of the court above.
Each arriving pair is split so that players rotate partners.
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

from typing import List, Sequence, Tuple

from courtpairing.constants import FORMAT_WINNERS_COURT
from courtpairing.exceptions import IncompleteRound, MalformedRoundState
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.engine_options import EngineOptions
from courtpairing.models.tournament.pairing_history import PairingHistory
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import CourtPairing, Roster, Team
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _arrivals(
    court_num: int, num_courts: int, winners: List[Team], losers: List[Team]
) -> Tuple[Team, Team]:
    """The two pairs moving onto ``court_num`` (1-indexed)."""
    idx = court_num - 1
    if num_courts == 1:
        return winners[0], losers[0]
    if court_num == 1:
        return winners[0], winners[1]
    if court_num == num_courts:
        return losers[idx - 1], losers[idx]
    return losers[idx - 1], winners[idx + 1]


def _split_options(first: Team, second: Team) -> List[CourtPairing]:
    """Candidate team splits in order of preference."""
    a, b = first
    c, d = second
    return [
        ((a, c), (b, d)),
        ((a, d), (b, c)),
        ((a, b), (c, d)),
    ]


def _choose_split(
    first: Team,
    second: Team,
    history: PairingHistory,
    next_round_num: int,
    window: int,
) -> CourtPairing:
    """Pick the first split with no repeat partnership in the window.

    When every split repeats, the one whose repeats are least recent wins.
    """
    options = _split_options(first, second)
    scored = []
    for order, (team_a, team_b) in enumerate(options):
        penalties = [
            history.partner_penalty(team_a[0], team_a[1], next_round_num, window),
            history.partner_penalty(team_b[0], team_b[1], next_round_num, window),
        ]
        if not any(penalties):
            return team_a, team_b
        scored.append(((max(penalties), sum(penalties), order), (team_a, team_b)))

    scored.sort(key=lambda item: item[0])
    logger.warning(
        f"Round {next_round_num}: every split of {first} + {second} repeats a "
        f"partnership within {window} round(s), using least recent"
    )
    return scored[0][1]


class WinnersCourtScheduler:
    """Scheduler for the Winner's Court ladder format."""

    format = FORMAT_WINNERS_COURT

    def roster(
        self,
        current: RoundState,
        lookback: Sequence[RoundState],
        options: EngineOptions,
    ) -> Roster:
        # Everyone plays every round, so the current round is the roster
        return current.players

    def schedule(
        self,
        current: RoundState,
        lookback: Sequence[RoundState],
        options: EngineOptions,
    ) -> RoundState:
        """Build the next ladder round from the decided ``current`` round.

        Raises:
            IncompleteRound: If any court of ``current`` has no score
        """
        if not current.is_complete:
            raise IncompleteRound(current.round_num, current.pending_courts)

        num_courts = current.num_courts
        if num_courts < 1:
            raise MalformedRoundState(f"Round {current.round_num} has no courts")

        next_num = current.round_num + 1
        window = options.anti_repeat_window
        history = PairingHistory.from_rounds(lookback)

        winners = [court.winners for court in current.courts]
        losers = [court.losers for court in current.courts]

        courts = []
        for court_num in range(1, num_courts + 1):
            first, second = _arrivals(court_num, num_courts, winners, losers)
            team_a, team_b = _choose_split(first, second, history, next_num, window)
            courts.append(CourtMatch(court_num=court_num, team_a=team_a, team_b=team_b))

        logger.info(f"Winner's Court round {next_num} scheduled on {num_courts} court(s)")
        return RoundState(round_num=next_num, courts=tuple(courts))

