import pytest

from courtpairing.exceptions import IncompleteRound, UnsupportedFormat
from courtpairing.models.scoring.scoring_config import (
    AMERICANO_SCORING,
    WINNERS_COURT_SCORING,
    RoundOutcome,
    ScoringConfig,
)
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.scoring.points import (
    americano_points_for_player,
    defend_bonus_active,
    outcomes_for_court,
    round_points,
    round_points_for_player,
    scoring_config_for,
)


def _round(round_num, *scores):
    courts = [
        CourtMatch(1, ("A", "B"), ("C", "D"), *scores[0]),
        CourtMatch(2, ("E", "F"), ("G", "H"), *scores[1]),
    ]
    return RoundState(round_num, tuple(courts))


def test_defending_top_court_with_margin_hits_cap():
    assert round_points_for_player(RoundOutcome(True, 1, 12, True, False)) == 5


def test_loss_scores_nothing():
    assert round_points_for_player(RoundOutcome(False, 1, -12, False, False)) == 0


def test_plain_win_scores_base_points():
    assert round_points_for_player(RoundOutcome(True, 2, 3)) == 3


def test_margin_bonus_threshold_is_inclusive():
    assert round_points_for_player(RoundOutcome(True, 2, 10)) == 4
    assert round_points_for_player(RoundOutcome(True, 2, 9)) == 3


def test_bonuses_sum_before_cap():
    config = ScoringConfig(promotion_bonus_points=2)
    outcome = RoundOutcome(True, 1, 15, defended_c1=True, promoted=True)
    assert round_points_for_player(outcome, config) == 5


def test_americano_preset():
    assert round_points_for_player(RoundOutcome(True, 1, 8), AMERICANO_SCORING) == 3
    assert round_points_for_player(RoundOutcome(True, 1, 7), AMERICANO_SCORING) == 2
    assert round_points_for_player(RoundOutcome(True, 1, 20, True), AMERICANO_SCORING) == 3


def test_defend_bonus_starts_at_configured_round():
    assert not defend_bonus_active(4)
    assert defend_bonus_active(5)
    assert not defend_bonus_active(9, AMERICANO_SCORING)


def test_outcomes_for_winners_court_top_court():
    court = CourtMatch(1, ("A", "B"), ("C", "D"), 21, 11)
    outcomes = outcomes_for_court(court, 6, "winners-court")

    assert outcomes["A"] == RoundOutcome(True, 1, 10, defended_c1=True, promoted=False)
    assert outcomes["C"] == RoundOutcome(False, 1, -10, defended_c1=False, promoted=False)

    early = outcomes_for_court(court, 2, "winners-court")
    assert not early["A"].defended_c1


def test_outcomes_for_lower_court_promote_winners():
    court = CourtMatch(2, ("A", "B"), ("C", "D"), 9, 21)
    outcomes = outcomes_for_court(court, 6, "winners-court")
    assert outcomes["C"].promoted
    assert not outcomes["A"].promoted


def test_americano_outcomes_have_no_ladder_flags():
    court = CourtMatch(1, ("A", "B"), ("C", "D"), 21, 3)
    outcome = outcomes_for_court(court, 8, "americano")["A"]
    assert outcome.won and not outcome.defended_c1 and not outcome.promoted


def test_round_points_for_decided_round():
    points = round_points(_round(6, (21, 5), (12, 9)), "winners-court")
    assert points == {
        "A": 5,
        "B": 5,
        "C": 0,
        "D": 0,
        "E": 3,
        "F": 3,
        "G": 0,
        "H": 0,
    }


def test_round_points_requires_every_score():
    with pytest.raises(IncompleteRound) as excinfo:
        round_points(_round(3, (21, 5), (None, None)), "winners-court")
    assert excinfo.value.pending_courts == (2,)


def test_scoring_config_for_format():
    assert scoring_config_for("winners-court") is WINNERS_COURT_SCORING
    assert scoring_config_for("americano") is AMERICANO_SCORING
    with pytest.raises(UnsupportedFormat):
        scoring_config_for("mexicano")


def test_americano_points_are_team_games():
    assert americano_points_for_player(14) == 14
    assert americano_points_for_player(0) == 0


def test_scoring_config_from_club_settings():
    config = ScoringConfig.from_dict({"marginBonusThreshold": 6, "maxPointsPerMatch": 6})
    assert config.margin_bonus_threshold == 6
    assert config.base_win_points == 3
    assert ScoringConfig.from_dict(config.to_dict()) == config
