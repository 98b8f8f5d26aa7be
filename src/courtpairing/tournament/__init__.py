"""Event-level views over played rounds.

This package derives information that spans rounds: the court movement
between consecutive rounds and the event leaderboard.
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

from courtpairing.tournament.round_diff import (
    PlayerMovement,
    RoundDiffResult,
    diff_rounds,
)
from courtpairing.tournament.standings import PlayerStanding, compute_standings

__all__ = [
    "PlayerMovement",
    "RoundDiffResult",
    "diff_rounds",
    "PlayerStanding",
    "compute_standings",
]
