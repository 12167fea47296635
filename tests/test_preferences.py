import pytest

from courtshuffle.models.round import Round, make_match
from courtshuffle.models.shuffle_config import ScoringWeights
from courtshuffle.pairing.heuristics import compute_heuristics, match_identifier
from courtshuffle.pairing.preferences import (
    opponent_score,
    partner_preferences,
    partner_score,
    team_preferences,
)

ROSTER = ["a", "b", "c", "d", "e", "f"]


def _heuristics():
    rounds = [
        Round(matches=[make_match(("a", "b"), ("c", "d"))], sit_outs=["e", "f"]),
        Round(matches=[make_match(("a", "e"), ("f", "d"))], sit_outs=["b", "c"]),
    ]
    return compute_heuristics(rounds, ROSTER)


def test_partner_score_prefers_new_then_stale_partners():
    heuristics = _heuristics()

    never = partner_score("a", heuristics, "c")
    two_rounds_ago = partner_score("a", heuristics, "b")
    last_round = partner_score("a", heuristics, "e")

    assert never > two_rounds_ago > last_round
    assert two_rounds_ago == pytest.approx(0.5)
    assert last_round == 0


def test_partner_count_exponent_changes_steepness():
    heuristics = _heuristics()
    flat = ScoringWeights(partner_count_exponent=0.0)

    # 0 ** 0 is 1, so a pair that never partnered gets a divisor of 2
    assert partner_score("a", heuristics, "c", flat) == pytest.approx(
        partner_score("a", heuristics, "c") / 2
    )


def test_opponent_score_punishes_repeated_matchups():
    heuristics = _heuristics()
    team, opponent = ("a", "b"), ("c", "d")
    key = match_identifier((team, opponent))

    fresh = opponent_score(team, heuristics, opponent, {})
    repeated_once = opponent_score(team, heuristics, opponent, {key: 1})
    repeated_twice = opponent_score(team, heuristics, opponent, {key: 2})

    assert fresh > 0
    assert repeated_once == pytest.approx(fresh / 2)
    assert repeated_twice == pytest.approx(fresh / 5)


def test_opponent_score_prefers_unseen_opponents():
    heuristics = _heuristics()

    # b and c never met e or f; a and d met both of them last round
    unseen = opponent_score(("b", "c"), heuristics, ("e", "f"), {})
    recent = opponent_score(("a", "d"), heuristics, ("e", "f"), {})

    assert unseen > recent


def test_partner_preferences_matrix():
    heuristics = _heuristics()
    matrix = partner_preferences(ROSTER, heuristics)

    assert len(matrix) == len(ROSTER)
    assert all(len(row) == len(ROSTER) for row in matrix)
    assert all(matrix[i][i] == 0.0 for i in range(len(ROSTER)))
    assert matrix[0][2] == partner_score("a", heuristics, "c")


def test_team_preferences_matrix():
    heuristics = _heuristics()
    teams = [("a", "b"), ("c", "d"), ("e", "f")]
    matrix = team_preferences(teams, heuristics, {})

    assert len(matrix) == 3
    assert [matrix[i][i] for i in range(3)] == [0.0, 0.0, 0.0]
    assert matrix[0][1] == opponent_score(("a", "b"), heuristics, ("c", "d"), {})
