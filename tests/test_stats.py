import pytest

from courtshuffle.models.round import Round, make_match
from courtshuffle.utils.stats import fairness_report, get_variance


def test_variance():
    assert get_variance([]) == 0
    assert get_variance([3, 3, 3]) == 0
    assert get_variance([1, 2, 3, 4]) == pytest.approx(1.25)
    assert get_variance(x for x in [2, 4]) == pytest.approx(1.0)


def test_fairer_spread_has_lower_variance():
    assert get_variance([1, 1, 2, 2]) < get_variance([0, 0, 3, 3])


def test_fairness_report():
    roster = ["a", "b", "c", "d", "e", "f"]
    played = Round(matches=[make_match(("a", "b"), ("c", "d"))], sit_outs=["e", "f"])

    report = fairness_report([played, played], roster)

    assert report.max_played_with == 2
    assert report.repeated_matches == 1
    # e and f sat out twice, everyone else never
    assert report.sit_out_variance == pytest.approx(get_variance([0, 0, 0, 0, 2, 2]))
    assert report.partner_variance > 0
    assert report.to_dict()["repeated_matches"] == 1


def test_fairness_report_without_rounds():
    report = fairness_report([], ["a", "b", "c", "d"])

    assert report.partner_variance == 0
    assert report.opponent_variance == 0
    assert report.max_played_with == 0
    assert report.repeated_matches == 0
