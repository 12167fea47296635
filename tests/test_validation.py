import pytest

from courtshuffle.exceptions import InvalidRosterException
from courtshuffle.utils.validation import (
    ensure_valid_roster,
    validate_courts,
    validate_roster,
)


def test_validate_roster():
    result = validate_roster(("a", "b", "c", "d"))
    assert result
    assert result.sanitized_value == ["a", "b", "c", "d"]

    assert not validate_roster(["a", "b", "c"])

    duplicated = validate_roster(["a", "b", "b", "c"])
    assert not duplicated
    assert "b" in duplicated.error_message


@pytest.mark.parametrize(
    "courts, expected", [(1, 1), (3, 3), ("2", 2)]
)
def test_valid_courts(courts, expected):
    result = validate_courts(courts)
    assert result
    assert result.sanitized_value == expected


@pytest.mark.parametrize("courts", [0, -2, 1.5, "two", None])
def test_invalid_courts(courts):
    assert not validate_courts(courts)


def test_ensure_valid_roster():
    assert ensure_valid_roster(iter(["a", "b", "c", "d"]), 1) == ["a", "b", "c", "d"]
    with pytest.raises(InvalidRosterException):
        ensure_valid_roster(["a", "b", "c", "d"], 0)
