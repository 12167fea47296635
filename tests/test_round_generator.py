import random

import pytest

from courtshuffle.exceptions import (
    GenerationCancelledException,
    GenerationExhaustedException,
    InvalidRosterException,
)
from courtshuffle.models.round import Round, make_match
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.pairing.heuristics import compute_heuristics
from courtshuffle.pairing.round_generator import generate_round, team_partition_score


def _roster(size):
    return [f"p{i:02d}" for i in range(size)]


@pytest.mark.parametrize(
    "size, courts, expected_matches",
    [(4, 1, 1), (5, 1, 1), (8, 2, 2), (9, 3, 2), (14, 2, 2), (13, 4, 3)],
)
def test_round_partitions_roster(size, courts, expected_matches):
    roster = _roster(size)
    rounds = []
    rng = random.Random(size * 10 + courts)
    for _ in range(3):
        new_round, _ = generate_round(rounds, roster, courts, rng=rng)
        assert new_round.covers(roster)
        assert len(new_round.matches) == expected_matches
        assert len(new_round.matches) <= courts
        assert len(new_round.matches) == (size - len(new_round.sit_outs)) // 4
        rounds.append(new_round)


def test_volunteers_sit_out():
    roster = _roster(9)
    rng = random.Random(5)
    for _ in range(5):
        new_round, _ = generate_round([], roster, 2, ["p03", "p07"], rng=rng)
        assert {"p03", "p07"} <= set(new_round.sit_outs)
        assert new_round.covers(roster)


def test_avoids_last_partner():
    roster = ["a", "b", "c", "d"]
    previous = [Round(matches=[make_match(("a", "b"), ("c", "d"))])]

    new_round, diagnostics = generate_round(
        previous, roster, 1, rng=random.Random(9)
    )

    assert ("a", "b") not in new_round.teams
    assert ("c", "d") not in new_round.teams
    assert diagnostics.team_score == 0


def test_accepts_precomputed_heuristics():
    roster = _roster(8)
    heuristics = compute_heuristics([], roster)

    new_round, _ = generate_round(
        [], roster, 2, heuristics=heuristics, match_counts={}, rng=random.Random(1)
    )

    assert new_round.covers(roster)


def test_invalid_roster():
    with pytest.raises(InvalidRosterException):
        generate_round([], ["a", "b", "c"], 1)
    with pytest.raises(InvalidRosterException):
        generate_round([], ["a", "b", "c", "d"], 0)
    with pytest.raises(InvalidRosterException):
        generate_round([], ["a", "a", "b", "c"], 1)


def test_exhausted_when_too_few_left_to_play():
    roster = ["a", "b", "c", "d", "e"]

    with pytest.raises(GenerationExhaustedException):
        generate_round([], roster, 1, ["a", "b"], rng=random.Random(0))


def test_checkpoint_can_cancel():
    def cancel():
        raise GenerationCancelledException("stop")

    with pytest.raises(GenerationCancelledException):
        generate_round([], _roster(8), 2, checkpoint=cancel)


def test_small_budgets_still_produce_a_round():
    config = ShuffleConfig(
        match_generations=1, unique_partitions_per_court=1, team_generation_budget=1
    )

    new_round, _ = generate_round([], _roster(8), 2, config=config, rng=random.Random(2))

    assert len(new_round.matches) == 2


def test_team_partition_score():
    roster = ["a", "b", "c", "d"]
    heuristics = compute_heuristics(
        [Round(matches=[make_match(("a", "b"), ("c", "d"))])], roster
    )

    assert team_partition_score([("a", "b"), ("c", "d")], heuristics) == 4
    assert team_partition_score([("a", "c"), ("b", "d")], heuristics) == 0
