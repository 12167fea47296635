import copy

from courtshuffle.constants import INFINITY
from courtshuffle.models.round import Round, make_match
from courtshuffle.pairing.heuristics import (
    age_heuristics,
    compute_heuristics,
    count_matches,
    match_identifier,
)

ROSTER = ["a", "b", "c", "d", "e", "f"]


def _round(matches, sit_outs):
    return Round(
        matches=[make_match(team_a, team_b) for team_a, team_b in matches],
        sit_outs=list(sit_outs),
    )


def _sample_rounds():
    return [
        _round([(("a", "b"), ("c", "d"))], ["e", "f"]),
        _round([(("a", "e"), ("f", "d"))], ["b", "c"]),
        _round([(("b", "e"), ("c", "f"))], ["a", "d"]),
    ]


def test_simple_example():
    heuristics = compute_heuristics(_sample_rounds()[:2], ROSTER)

    assert heuristics["a"].rounds_since_played_with["b"] == 2
    assert heuristics["d"].rounds_since_played_with["f"] == 1
    assert heuristics["f"].rounds_since_played_against["e"] == 1
    assert heuristics["e"].rounds_since_sit_out == 2
    assert heuristics["b"].rounds_since_sit_out == 1
    assert heuristics["a"].rounds_since_sit_out == INFINITY


def test_counts_and_min_max():
    heuristics = compute_heuristics(_sample_rounds()[:2], ROSTER)
    played_with = heuristics["a"].played_with_count

    assert played_with["b"] == 1
    assert played_with["e"] == 1
    assert played_with["c"] == 0
    assert played_with.min == 0
    assert played_with.max == 1
    assert heuristics["a"].rounds_since_played_with.min == 1
    assert heuristics["a"].played_against_count["d"] == 2
    assert heuristics["e"].sit_out_count == 1


def test_no_self_entries():
    heuristics = compute_heuristics(_sample_rounds(), ROSTER)
    for player, player_heuristics in heuristics.items():
        assert player not in player_heuristics.played_with_count
        assert player not in player_heuristics.rounds_since_played_with
        assert player not in player_heuristics.played_against_count
        assert player not in player_heuristics.rounds_since_played_against


def test_is_pure():
    rounds = _sample_rounds()
    rounds_before = copy.deepcopy(rounds)
    previous = compute_heuristics(rounds[:1], ROSTER)
    previous_before = {p: h.copy() for p, h in previous.items()}

    first = compute_heuristics(rounds[1:], ROSTER, previous)
    second = compute_heuristics(rounds[1:], ROSTER, previous)

    assert rounds == rounds_before
    assert previous == previous_before
    assert first == second


def test_ignores_worse_values():
    played = _sample_rounds()[0]

    twice = compute_heuristics([played, played], ROSTER)
    assert twice["a"].rounds_since_played_with["b"] == 1
    assert twice["a"].played_with_count["b"] == 2
    assert twice["e"].rounds_since_sit_out == 1

    chained = compute_heuristics([played], ROSTER, compute_heuristics([played], ROSTER))
    assert chained["a"].rounds_since_played_with["b"] == 1
    assert chained["c"].rounds_since_played_against["a"] == 1


def test_aged_chain_matches_full_history():
    rounds = _sample_rounds()

    chained = compute_heuristics(rounds[:1], ROSTER)
    for round_ in rounds[1:]:
        chained = compute_heuristics([round_], ROSTER, age_heuristics(chained))

    assert chained == compute_heuristics(rounds, ROSTER)
    assert chained["a"].rounds_since_played_with["b"] == 3
    assert chained["e"].rounds_since_sit_out == 3


def test_age_heuristics_copies_and_caps():
    heuristics = compute_heuristics(_sample_rounds()[:1], ROSTER)

    aged = age_heuristics(heuristics, rounds=2)

    assert aged["a"].rounds_since_played_with["b"] == 3
    assert aged["a"].rounds_since_played_with["c"] == INFINITY
    assert aged["a"].rounds_since_sit_out == INFINITY
    assert aged["e"].rounds_since_sit_out == 3
    assert aged["a"].played_with_count["b"] == 1
    assert heuristics["a"].rounds_since_played_with["b"] == 1


def test_unseen_players_get_defaults():
    heuristics = compute_heuristics(_sample_rounds()[:1], ROSTER + ["g"])

    assert heuristics["g"].rounds_since_played_with["a"] == INFINITY
    assert heuristics["g"].played_against_count["a"] == 0
    assert heuristics["a"].rounds_since_played_against["g"] == INFINITY


def test_late_player_sit_outs():
    rounds = _sample_rounds()
    everyone_sat_out_once_or_twice = rounds + [rounds[0]]

    heuristics = compute_heuristics(everyone_sat_out_once_or_twice, ROSTER + ["late"])

    assert heuristics["late"].sit_out_count == 2
    assert heuristics["e"].sit_out_count == 2
    assert heuristics["a"].sit_out_count == 1


def test_late_player_in_history():
    rounds = _sample_rounds()[:2] + [
        _round([(("late", "a"), ("b", "c"))], ["d", "e", "f"])
    ]

    heuristics = compute_heuristics(rounds, ROSTER + ["late"])

    # One more than the fewest sit-outs recorded when they arrived
    assert heuristics["late"].sit_out_count == 2
    assert heuristics["late"].played_with_count["a"] == 1


def test_match_identifier_is_order_independent():
    assert match_identifier((("b", "a"), ("d", "c"))) == "a b|c d"
    assert match_identifier((("d", "c"), ("a", "b"))) == "a b|c d"


def test_count_matches():
    played = _sample_rounds()[0]

    counts, duplicates = count_matches([played, played])
    assert duplicates == 1
    assert counts == {"a b|c d": 2}

    more, new_duplicates = count_matches([played], counts)
    assert new_duplicates == 1
    assert more["a b|c d"] == 3
    assert counts["a b|c d"] == 2
