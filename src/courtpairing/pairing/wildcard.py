"""Wildcard round cadence and court reshuffles.

A wildcard round breaks the normal schedule to mix players across courts.
The reshuffles here are seeded so that a given round always shuffles the
same way. None of them is applied unless a caller registers it with the
advance orchestrator.
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

import random
from typing import Callable, List, Optional

from courtpairing.constants import (
    PLAYERS_PER_COURT,
    WILDCARD_CHAOTIC,
    WILDCARD_INTENSITIES,
    WILDCARD_LIGHT,
    WILDCARD_MEDIUM,
    WILDCARD_SHUFFLE_SHARE,
)
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

WildcardTransform = Callable[[RoundState], RoundState]


def is_wildcard_round(
    round_num: int,
    start_round: Optional[int],
    frequency: Optional[int],
    enabled: bool = True,
) -> bool:
    """Whether ``round_num`` is a wildcard round.

    Wildcards start at ``start_round`` and recur every ``frequency`` rounds.
    Missing or non-positive settings disable them.
    """
    if not enabled or not start_round or not frequency or frequency < 1:
        return False
    if round_num < start_round:
        return False
    return (round_num - start_round) % frequency == 0


def next_wildcard_round(
    round_num: int,
    start_round: Optional[int],
    frequency: Optional[int],
    enabled: bool = True,
) -> Optional[int]:
    """First wildcard round strictly after ``round_num``, None when disabled."""
    if not enabled or not start_round or not frequency or frequency < 1:
        return None
    if round_num < start_round:
        return start_round
    since_start = round_num - start_round
    return round_num + frequency - (since_start % frequency)


def _light_shuffle(players: List[PlayerId], num_courts: int, rng: random.Random) -> None:
    # Swap single players between neighbouring courts
    if num_courts < 2:
        return
    swaps = int(len(players) * WILDCARD_SHUFFLE_SHARE[WILDCARD_LIGHT])
    for _ in range(swaps):
        upper = rng.randrange(num_courts - 1)
        pos1 = upper * PLAYERS_PER_COURT + rng.randrange(PLAYERS_PER_COURT)
        pos2 = (upper + 1) * PLAYERS_PER_COURT + rng.randrange(PLAYERS_PER_COURT)
        players[pos1], players[pos2] = players[pos2], players[pos1]


def _medium_shuffle(players: List[PlayerId], rng: random.Random) -> None:
    # Permute a random half of the positions among themselves
    count = int(len(players) * WILDCARD_SHUFFLE_SHARE[WILDCARD_MEDIUM])
    positions = sorted(rng.sample(range(len(players)), count))
    moved = [players[pos] for pos in positions]
    rng.shuffle(moved)
    for pos, pid in zip(positions, moved):
        players[pos] = pid


def shuffle_courts(round_state: RoundState, intensity: str, seed: int = 0) -> RoundState:
    """Reshuffle players across the courts of ``round_state``.

    Args:
        round_state: Round to reshuffle, usually a freshly scheduled one
        intensity: "light" swaps about a quarter of the players between
            adjacent courts, "medium" redistributes about half of them and
            "chaotic" permutes everyone
        seed: Seed for the private random generator

    Returns:
        A new RoundState with the same courts, reshuffled teams and no scores
    """
    if intensity not in WILDCARD_INTENSITIES:
        raise InvalidConfigurationException(f"Unknown wildcard intensity: {intensity!r}")

    rng = random.Random(seed)
    players = round_state.players
    if intensity == WILDCARD_LIGHT:
        _light_shuffle(players, round_state.num_courts, rng)
    elif intensity == WILDCARD_MEDIUM:
        _medium_shuffle(players, rng)
    elif intensity == WILDCARD_CHAOTIC:
        rng.shuffle(players)

    courts = []
    for court in round_state.courts:
        start = (court.court_num - 1) * PLAYERS_PER_COURT
        p1, p2, p3, p4 = players[start : start + PLAYERS_PER_COURT]
        courts.append(CourtMatch(court_num=court.court_num, team_a=(p1, p2), team_b=(p3, p4)))

    logger.info(f"Wildcard ({intensity}) reshuffled round {round_state.round_num}")
    return RoundState(round_num=round_state.round_num, courts=tuple(courts))


def seeded_shuffle(intensity: str, seed: int = 0) -> WildcardTransform:
    """Build a transform for ``advance_round`` that reshuffles with ``seed``.

    The round number is mixed into the seed so successive wildcard rounds
    differ.
    """

    def transform(round_state: RoundState) -> RoundState:
        return shuffle_courts(round_state, intensity, seed + round_state.round_num)

    return transform
