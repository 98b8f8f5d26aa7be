"""Elo rating model for two-versus-two matches.

Team strength is the mean of both players' ratings. A match produces one
delta for the winners and the mirrored delta for the losers; the court
role tag scales it so results on prestigious courts move ratings further.
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

from typing import Dict, Iterable, Optional

from courtpairing.constants import (
    ELO_SCALE,
    FORMAT_WINNERS_COURT,
    ROLE_WINNERS_COURT,
    TOP_COURT,
)
from courtpairing.exceptions import IncompleteRound
from courtpairing.models.rating.elo_config import EloConfig
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.type_hints import PlayerId, Ratings
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

_DEFAULT_CONFIG = EloConfig()


def expected_score(rating_a: float, rating_b: float) -> float:
    """Probability that side A beats side B.

    Args:
        rating_a: Rating of side A
        rating_b: Rating of side B

    Returns:
        Value in (0, 1); ``expected_score(a, b) + expected_score(b, a) == 1``
    """
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / ELO_SCALE))


def court_modifier(config: EloConfig, court_role: Optional[str]) -> float:
    """Multiplier for ``court_role``, 1.0 when the role has no modifier."""
    if court_role is None:
        return 1.0
    return float(config.court_modifiers.get(court_role, 1.0))


def update_elo_team_vs_team(
    team_rating: float,
    opponent_rating: float,
    won: bool,
    config: Optional[EloConfig] = None,
    court_role: Optional[str] = None,
) -> float:
    """Rating delta for a team after one match.

    Args:
        team_rating: Mean rating of the team being updated
        opponent_rating: Mean rating of the opposing team
        won: Whether the team won
        config: Elo settings, defaults to ``EloConfig()``
        court_role: Court role tag looked up in ``config.court_modifiers``

    Returns:
        Signed, unrounded delta. Positive for a win and negative for a loss.
    """
    if config is None:
        config = _DEFAULT_CONFIG
    actual = 1.0 if won else 0.0
    expected = expected_score(team_rating, opponent_rating)
    return config.k_factor * (actual - expected) * court_modifier(config, court_role)


def team_rating(ratings: Iterable[float]) -> float:
    """Mean rating of a team."""
    values = list(ratings)
    if not values:
        return 0.0
    return sum(values) / len(values)


def court_role_for(format: str, court_num: int) -> Optional[str]:
    """Court role tag for ``court_num``; only the Winner's Court top court has one."""
    if format == FORMAT_WINNERS_COURT and court_num == TOP_COURT:
        return ROLE_WINNERS_COURT
    return None


def rating_deltas_for_court(
    court: CourtMatch,
    ratings: Ratings,
    config: Optional[EloConfig] = None,
    court_role: Optional[str] = None,
) -> Dict[PlayerId, float]:
    """Per-player rating deltas for one decided court.

    Players missing from ``ratings`` are treated as new players at
    ``config.starting_elo``. Both teammates receive the same delta.

    Raises:
        IncompleteRound: If the court has no score yet
    """
    if config is None:
        config = _DEFAULT_CONFIG
    if not court.is_decided:
        raise IncompleteRound(0, [court.court_num])

    def rating_of(pid: PlayerId) -> float:
        return float(ratings.get(pid, config.starting_elo))

    rating_a = team_rating(rating_of(p) for p in court.team_a)
    rating_b = team_rating(rating_of(p) for p in court.team_b)
    a_won = court.team_a_won

    delta_a = update_elo_team_vs_team(rating_a, rating_b, a_won, config, court_role)
    delta_b = update_elo_team_vs_team(rating_b, rating_a, not a_won, config, court_role)
    logger.debug(
        f"Court {court.court_num}: {rating_a:.1f} vs {rating_b:.1f}, "
        f"deltas {delta_a:+.2f}/{delta_b:+.2f}"
    )

    deltas = {pid: delta_a for pid in court.team_a}
    deltas.update({pid: delta_b for pid in court.team_b})
    return deltas


def apply_rating_delta(
    rating: float, delta: float, config: Optional[EloConfig] = None
) -> float:
    """Apply ``delta`` to ``rating`` within the configured bounds.

    The delta is limited by the per-match gain and loss caps, and the
    result by the rating floor and ceiling.
    """
    if config is None:
        config = _DEFAULT_CONFIG
    bounded = max(-config.max_loss_per_match, min(config.max_gain_per_match, delta))
    return max(config.elo_floor, min(config.elo_ceiling, rating + bounded))
