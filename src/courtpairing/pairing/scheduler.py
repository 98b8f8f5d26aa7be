"""Round scheduling entry points."""

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

from types import MappingProxyType
from typing import List, Optional, Sequence

from courtpairing.constants import (
    DEFAULT_FORMAT,
    FORMAT_AMERICANO,
    FORMAT_WINNERS_COURT,
    PLAYERS_PER_COURT,
)
from courtpairing.exceptions import MalformedRoundState, UnsupportedFormat
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.engine_options import EngineOptions
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.pairing.americano import AmericanoScheduler
from courtpairing.pairing.winners_court import WinnersCourtScheduler
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger
from courtpairing.validation.roster import (
    validate_player_count_for_format,
    validate_round_state,
)

logger = setup_logger(__name__)

SCHEDULERS = MappingProxyType(
    {
        FORMAT_AMERICANO: AmericanoScheduler(),
        FORMAT_WINNERS_COURT: WinnersCourtScheduler(),
    }
)


def get_scheduler(format: str):
    """Return the scheduler registered for ``format``."""
    try:
        return SCHEDULERS[format]
    except KeyError:
        raise UnsupportedFormat(format) from None


def _lookback(
    current: RoundState, history: Optional[Sequence[RoundState]]
) -> List[RoundState]:
    rounds = list(history or ())
    if all(r.round_num != current.round_num for r in rounds):
        rounds.append(current)
    return rounds


def next_round(
    current: RoundState,
    options: Optional[EngineOptions] = None,
    history: Optional[Sequence[RoundState]] = None,
) -> RoundState:
    """Generate the round that follows ``current``.

    Args:
        current: The most recent round
        options: Scheduling options, defaults to ``EngineOptions()``
        history: Previous rounds oldest first, used for lookback only.
            ``current`` is added when no round with its number is present.

    Returns:
        A new RoundState numbered ``current.round_num + 1`` with the same
        number of courts

    Raises:
        UnsupportedFormat: If no scheduler handles ``options.format``
        MalformedRoundState: If ``current`` breaks the round invariants
            or the roster repeats a player
        InvalidRosterSize: If the roster cannot fill the courts
        IncompleteRound: If Winner's Court is asked to advance a round
            that still has pending courts
    """
    if options is None:
        options = EngineOptions()
    scheduler = get_scheduler(options.format)
    validate_round_state(current)

    lookback = _lookback(current, history)
    roster = scheduler.roster(current, lookback, options)
    if len(set(roster)) != len(roster):
        raise MalformedRoundState("Roster contains duplicate players")
    validate_player_count_for_format(
        len(roster), options.format, current.num_courts
    ).raise_for_error()

    logger.debug(
        f"Scheduling round {current.round_num + 1} ({options.format}) "
        f"from {len(lookback)} round(s) of history"
    )
    return scheduler.schedule(current, lookback, options)


def initial_round(
    players: Sequence[PlayerId],
    num_courts: int,
    format: str = DEFAULT_FORMAT,
) -> RoundState:
    """Seed round 1 from a roster in the given order.

    Each court takes the next four players as ``[p1, p2]`` vs ``[p3, p4]``.
    In Americano any surplus players at the end of the list rest.

    Raises:
        UnsupportedFormat: If the format is unknown
        InvalidRosterSize: If the roster cannot fill ``num_courts``
    """
    get_scheduler(format)
    players = list(players)
    if len(set(players)) != len(players):
        raise MalformedRoundState("Roster contains duplicate players")
    validate_player_count_for_format(len(players), format, num_courts).raise_for_error()

    courts = []
    for idx in range(num_courts):
        p1, p2, p3, p4 = players[idx * PLAYERS_PER_COURT : (idx + 1) * PLAYERS_PER_COURT]
        courts.append(CourtMatch(court_num=idx + 1, team_a=(p1, p2), team_b=(p3, p4)))

    logger.info(f"Round 1 seeded with {len(players)} players on {num_courts} court(s)")
    return RoundState(round_num=1, courts=tuple(courts))
