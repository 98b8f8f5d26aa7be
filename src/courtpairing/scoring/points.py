"""Leaderboard points for round outcomes."""

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

from typing import Dict, Optional

from courtpairing.constants import (
    FORMAT_AMERICANO,
    FORMAT_WINNERS_COURT,
    SUPPORTED_FORMATS,
    TOP_COURT,
)
from courtpairing.exceptions import IncompleteRound, UnsupportedFormat
from courtpairing.models.scoring.scoring_config import (
    AMERICANO_SCORING,
    WINNERS_COURT_SCORING,
    RoundOutcome,
    ScoringConfig,
)
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId, RoundPoints


def scoring_config_for(format: str) -> ScoringConfig:
    """Default points preset for a tournament format."""
    if format not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(format)
    if format == FORMAT_AMERICANO:
        return AMERICANO_SCORING
    return WINNERS_COURT_SCORING


def defend_bonus_active(round_num: int, config: Optional[ScoringConfig] = None) -> bool:
    """Whether the top-court defend bonus is awarded in ``round_num``."""
    if config is None:
        config = WINNERS_COURT_SCORING
    if config.defend_bonus_start_round is None or config.defend_bonus_points <= 0:
        return False
    return round_num >= config.defend_bonus_start_round


def round_points_for_player(
    outcome: RoundOutcome, config: Optional[ScoringConfig] = None
) -> int:
    """Convert one player's round outcome into leaderboard points.

    A loss earns nothing. A win earns the base points plus every bonus it
    qualifies for; the sum is then capped at ``max_points_per_match``.

    Args:
        outcome: The player's result for the round
        config: Points settings, defaults to the Winner's Court preset

    Returns:
        Points in ``[0, config.max_points_per_match]``
    """
    if config is None:
        config = WINNERS_COURT_SCORING
    if not outcome.won:
        return 0

    points = config.base_win_points
    if outcome.point_diff >= config.margin_bonus_threshold:
        points += config.margin_bonus_points
    if outcome.defended_c1:
        points += config.defend_bonus_points
    if outcome.promoted:
        points += config.promotion_bonus_points
    return min(points, config.max_points_per_match)


def outcomes_for_court(
    court: CourtMatch,
    round_num: int,
    format: str = FORMAT_WINNERS_COURT,
    config: Optional[ScoringConfig] = None,
) -> Dict[PlayerId, RoundOutcome]:
    """Derive each player's RoundOutcome from a decided court.

    In Winner's Court, winners on the top court defend it once the defend
    bonus is active and winners on any lower court are promoted. Americano
    has no court ladder so neither flag is set.
    """
    if config is None:
        config = scoring_config_for(format)
    if not court.is_decided:
        raise IncompleteRound(round_num, [court.court_num])

    diff = court.score_a - court.score_b
    a_won = court.team_a_won
    ladder = format == FORMAT_WINNERS_COURT
    on_top = court.court_num == TOP_COURT
    defended = ladder and on_top and defend_bonus_active(round_num, config)
    promotes = ladder and not on_top

    outcomes = {}
    for team, won, point_diff in (
        (court.team_a, a_won, diff),
        (court.team_b, not a_won, -diff),
    ):
        outcome = RoundOutcome(
            won=won,
            court=court.court_num,
            point_diff=point_diff,
            defended_c1=won and defended,
            promoted=won and promotes,
        )
        for pid in team:
            outcomes[pid] = outcome
    return outcomes


def round_points(
    round_state: RoundState,
    format: str,
    config: Optional[ScoringConfig] = None,
) -> RoundPoints:
    """Points for every player of a fully decided round.

    Raises:
        IncompleteRound: If any court is still pending
    """
    if config is None:
        config = scoring_config_for(format)
    if not round_state.is_complete:
        raise IncompleteRound(round_state.round_num, round_state.pending_courts)

    points: RoundPoints = {}
    for court in round_state.courts:
        for pid, outcome in outcomes_for_court(
            court, round_state.round_num, format, config
        ).items():
            points[pid] = round_points_for_player(outcome, config)
    return points


def americano_points_for_player(team_score: int) -> int:
    """Americano game-count scoring: a player earns the games their team won."""
    return max(0, int(team_score))
