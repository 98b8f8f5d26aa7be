"""Elo rating model."""

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

from courtpairing.rating.elo import (
    apply_rating_delta,
    court_modifier,
    court_role_for,
    expected_score,
    rating_deltas_for_court,
    team_rating,
    update_elo_team_vs_team,
)

__all__ = [
    "expected_score",
    "update_elo_team_vs_team",
    "court_modifier",
    "court_role_for",
    "team_rating",
    "rating_deltas_for_court",
    "apply_rating_delta",
]
