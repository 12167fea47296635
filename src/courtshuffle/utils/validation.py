"""Validation utilities for Court Shuffle.

This module provides reusable validation functions with consistent error handling.
"""

from typing import List, Optional, Sequence

from courtshuffle.constants import MIN_COURTS, MIN_PLAYERS
from courtshuffle.exceptions import InvalidRosterException
from courtshuffle.type_hints import PlayerId
from courtshuffle.utils import setup_logger

logger = setup_logger(__name__)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value=None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Roster Validation ==========


def validate_roster(roster: Sequence[PlayerId]) -> ValidationResult:
    """Validate the active roster.

    Args:
        roster: Player ids taking part in the next round

    Returns:
        ValidationResult whose sanitized value is the roster as a list

    Example:
        >>> bool(validate_roster(["a", "b", "c"]))
        False
    """
    players: List[PlayerId] = list(roster)
    if len(players) < MIN_PLAYERS:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"At least {MIN_PLAYERS} players are required, got {len(players)}"
            ),
        )

    if len(set(players)) != len(players):
        duplicates = sorted({p for p in players if players.count(p) > 1})
        return ValidationResult(
            is_valid=False,
            error_message=f"Duplicate player ids in roster: {', '.join(duplicates)}",
        )

    return ValidationResult(is_valid=True, sanitized_value=players)


# ========== Court Validation ==========


def validate_courts(courts) -> ValidationResult:
    """Validate a court count.

    Args:
        courts: Number of courts available

    Returns:
        ValidationResult whose sanitized value is the count as an int
    """
    try:
        count = int(courts)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Court count must be a number: {courts!r}"
        )

    if count != courts and not isinstance(courts, str):
        return ValidationResult(
            is_valid=False, error_message=f"Court count must be whole: {courts!r}"
        )

    if count < MIN_COURTS:
        return ValidationResult(
            is_valid=False,
            error_message=f"At least {MIN_COURTS} court is required, got {count}",
        )

    return ValidationResult(is_valid=True, sanitized_value=count)


def ensure_valid_roster(roster: Sequence[PlayerId], courts) -> List[PlayerId]:
    """Validate roster and courts, raising before any work begins.

    Raises:
        InvalidRosterException: If either check fails
    """
    roster_result = validate_roster(roster)
    for result in (roster_result, validate_courts(courts)):
        if not result:
            logger.error(result.error_message)
            raise InvalidRosterException(result.error_message)
    return roster_result.sanitized_value
