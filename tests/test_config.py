import pytest

from courtshuffle.exceptions import InvalidConfigurationException
from courtshuffle.models.shuffle_config import ScoringWeights, ShuffleConfig


def test_defaults():
    config = ShuffleConfig()

    assert config.round_lookahead == 3
    assert config.round_attempts == 20
    assert config.match_generations == 4
    assert config.sit_out_base_chance == 0.6
    assert config.weights.partner_count_exponent == 2.0
    assert config.weights.count_partners_as_seen is True


@pytest.mark.parametrize(
    "field, value",
    [
        ("round_lookahead", 0),
        ("round_attempts", -1),
        ("match_generations", 1.5),
        ("team_generation_budget", 0),
        ("matcher_iteration_count", -1),
        ("sit_out_base_chance", 0.0),
        ("sit_out_base_chance", 1.5),
    ],
)
def test_invalid_values(field, value):
    with pytest.raises(InvalidConfigurationException):
        ShuffleConfig(**{field: value})


def test_invalid_frequency_floor():
    with pytest.raises(InvalidConfigurationException):
        ScoringWeights(frequency_floor=2.0)


def test_dict_round_trip():
    config = ShuffleConfig(
        round_attempts=7,
        weights=ScoringWeights(repeat_match_exponent=3.0, count_partners_as_seen=False),
    )

    assert ShuffleConfig.from_dict(config.to_dict()) == config


def test_from_dict_fills_defaults_and_ignores_unknown_weights():
    config = ShuffleConfig.from_dict(
        {"round_lookahead": 2, "weights": {"frequency_floor": 0.25, "colour": "red"}}
    )

    assert config.round_lookahead == 2
    assert config.round_attempts == 20
    assert config.weights.frequency_floor == 0.25
