import pytest

from courtpairing.exceptions import IncompleteRound, InvalidRosterSize
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.engine_options import EngineOptions
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.pairing import initial_round, next_round

WC = EngineOptions(format="winners-court")


def _court(court_num, players, score_a=None, score_b=None):
    return CourtMatch(court_num, tuple(players[:2]), tuple(players[2:]), score_a, score_b)


def _round(round_num, *courts):
    return RoundState(round_num, tuple(courts))


def _teams(round_state):
    return [(c.team_a, c.team_b) for c in round_state.courts]


def test_winners_move_up_and_losers_move_down():
    current = _round(1, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    result = next_round(current, WC, [current])

    assert result.round_num == 2
    assert _teams(result) == [
        (("A", "G"), ("B", "H")),
        (("C", "E"), ("D", "F")),
    ]


def test_tie_counts_as_team_a_win():
    current = _round(1, _court(1, "ABCD", 10, 10), _court(2, "EFGH", 15, 15))
    result = next_round(current, WC)
    assert _teams(result)[0] == (("A", "E"), ("B", "F"))
    assert _teams(result)[1] == (("C", "G"), ("D", "H"))


def test_middle_court_takes_loser_from_above_and_winner_from_below():
    current = _round(
        1,
        _court(1, "ABCD", 21, 4),
        _court(2, "EFGH", 21, 4),
        _court(3, "IJKL", 4, 21),
    )
    result = next_round(current, WC)

    assert _teams(result) == [
        (("A", "E"), ("B", "F")),
        (("C", "K"), ("D", "L")),
        (("G", "I"), ("H", "J")),
    ]


def test_single_court_splits_winners_and_losers():
    current = _round(4, _court(1, "ABCD", 21, 15))
    result = next_round(current, WC)
    assert result.round_num == 5
    assert _teams(result) == [(("A", "C"), ("B", "D"))]


def test_recent_partnership_forces_alternative_split():
    earlier = _round(1, _court(1, "AGBH", 21, 19), _court(2, "CEDF", 21, 19))
    current = _round(2, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    result = next_round(current, WC, [earlier, current])

    assert _teams(result) == [
        (("A", "H"), ("B", "G")),
        (("C", "F"), ("D", "E")),
    ]


def test_window_zero_always_takes_preferred_split():
    earlier = _round(1, _court(1, "AGBH", 21, 19), _court(2, "CEDF", 21, 19))
    current = _round(2, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    options = EngineOptions(anti_repeat_window=0, format="winners-court")
    result = next_round(current, options, [earlier, current])

    assert _teams(result)[0] == (("A", "G"), ("B", "H"))


def test_partnership_outside_window_is_ignored():
    earlier = _round(1, _court(1, "AGBH", 21, 19), _court(2, "CEDF", 21, 19))
    current = _round(2, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    options = EngineOptions(anti_repeat_window=1, format="winners-court")
    result = next_round(current, options, [earlier, current])

    assert _teams(result)[0] == (("A", "G"), ("B", "H"))


def test_least_recent_repeat_wins_when_every_split_repeats():
    first = _round(1, _court(1, "AGBH", 21, 19), _court(2, "CEDF", 21, 19))
    second = _round(2, _court(1, "AHBG", 21, 19), _court(2, "CFDE", 21, 19))
    current = _round(3, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    result = next_round(current, WC, [first, second, current])

    assert _teams(result)[0] == (("A", "G"), ("B", "H"))
    assert _teams(result)[1] == (("C", "E"), ("D", "F"))


def test_pending_court_raises():
    current = _round(1, _court(1, "ABCD", 21, 10), _court(2, "EFGH"))
    with pytest.raises(IncompleteRound) as excinfo:
        next_round(current, WC)
    assert excinfo.value.pending_courts == (2,)


def test_history_is_not_mutated():
    current = _round(1, _court(1, "ABCD", 21, 10), _court(2, "EFGH", 8, 21))
    history = [current]
    next_round(current, WC, history)
    assert history == [current]


def test_initial_round_seeds_in_roster_order():
    seeded = initial_round(list("ABCDEFGH"), 2, "winners-court")
    assert seeded.round_num == 1
    assert _teams(seeded) == [
        (("A", "B"), ("C", "D")),
        (("E", "F"), ("G", "H")),
    ]


def test_initial_round_rejects_wrong_roster_size():
    with pytest.raises(InvalidRosterSize):
        initial_round(list("ABCDEFGHI"), 2, "winners-court")


def test_ladder_keeps_every_player_each_round():
    current = initial_round(list("ABCDEFGHIJKL"), 3, "winners-court")
    history = []
    for _ in range(8):
        current = _round(
            current.round_num,
            *(c.with_scores(21, 10 + c.court_num) for c in current.courts),
        )
        history.append(current)
        current = next_round(current, WC, history)
        assert sorted(current.players) == list("ABCDEFGHIJKL")
        assert [c.court_num for c in current.courts] == [1, 2, 3]
