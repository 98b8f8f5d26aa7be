"""Round-to-round court movement."""

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
from typing import FrozenSet, List, Optional

from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId


@dataclass(frozen=True)
class PlayerMovement:
    """Where one player was and where they are now.

    Attributes
    ----------
    player_id : str
    from_court : int or None
        Court in the previous round, None when there is no prior court.
    to_court : int
    changed : bool
        True only when a prior court exists and differs from ``to_court``.
    """

    player_id: PlayerId
    from_court: Optional[int]
    to_court: int
    changed: bool


@dataclass(frozen=True)
class RoundDiffResult:
    movements: List[PlayerMovement] = field(default_factory=list)
    moved_player_ids: FrozenSet[PlayerId] = frozenset()

    @property
    def moved_count(self) -> int:
        return len(self.moved_player_ids)


def diff_rounds(prev: Optional[RoundState], next: RoundState) -> RoundDiffResult:
    """Compare the court assignments of two consecutive rounds.

    Every player of ``next`` gets a movement, in ``next`` court order. A
    player new to the event, or any player when ``prev`` is None, has no
    prior court and is never reported as moved.
    """
    before = prev.court_assignment() if prev is not None else {}

    movements = []
    for court in next.courts:
        for pid in court.players:
            from_court = before.get(pid)
            movements.append(
                PlayerMovement(
                    player_id=pid,
                    from_court=from_court,
                    to_court=court.court_num,
                    changed=from_court is not None and from_court != court.court_num,
                )
            )

    moved = frozenset(m.player_id for m in movements if m.changed)
    return RoundDiffResult(movements=movements, moved_player_ids=moved)
