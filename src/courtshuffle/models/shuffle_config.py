"""ShuffleConfig and ScoringWeights data classes."""

# Court Shuffle
# Copyright (C) 2025  Court Shuffle developers
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

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict

from courtshuffle.constants import (
    DEFAULT_DUPLICATE_PENALTY_EXPONENT,
    DEFAULT_FREQUENCY_FLOOR,
    DEFAULT_MATCH_GENERATIONS,
    DEFAULT_MATCHER_FINAL_ITERATION_COUNT,
    DEFAULT_MATCHER_ITERATION_COUNT,
    DEFAULT_OPPONENT_STALENESS_EXPONENT,
    DEFAULT_PARTNER_COUNT_EXPONENT,
    DEFAULT_REPEAT_MATCH_EXPONENT,
    DEFAULT_ROUND_ATTEMPTS,
    DEFAULT_ROUND_LOOKAHEAD,
    DEFAULT_SIT_OUT_BASE_CHANCE,
    DEFAULT_TEAM_GENERATION_BUDGET,
    DEFAULT_UNIQUE_PARTITIONS_PER_COURT,
)
from courtshuffle.exceptions import InvalidConfigurationException


@dataclass
class ScoringWeights:
    """Tunable exponents of the preference and round scores.

    The formulas are empirical; these weights only change how steeply each
    term rewards or punishes, never what is compared.

    Attributes
    ----------
    partner_count_exponent : float
        Exponent on the net times partnered in the partner score divisor.
    opponent_staleness_exponent : float
        Exponent on the net rounds since two players last met.
    repeat_match_exponent : float
        Exponent on how often an exact matchup already happened.
    duplicate_penalty_exponent : float
        Exponent on ``duplicates + 1`` when scoring a whole round of matches.
    frequency_floor : float
        Opponent multiplier for the most over-exposed pair (1.0 disables).
    count_partners_as_seen : bool
        Treat a recent partnership as a recent meeting when scoring opponents.
    """

    partner_count_exponent: float = DEFAULT_PARTNER_COUNT_EXPONENT
    opponent_staleness_exponent: float = DEFAULT_OPPONENT_STALENESS_EXPONENT
    repeat_match_exponent: float = DEFAULT_REPEAT_MATCH_EXPONENT
    duplicate_penalty_exponent: float = DEFAULT_DUPLICATE_PENALTY_EXPONENT
    frequency_floor: float = DEFAULT_FREQUENCY_FLOOR
    count_partners_as_seen: bool = True

    def __post_init__(self):
        if not 0.0 <= self.frequency_floor <= 1.0:
            raise InvalidConfigurationException(
                f"frequency_floor must be between 0 and 1, got {self.frequency_floor}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize weights to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringWeights":
        """Deserialize weights from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class ShuffleConfig:
    """Search budgets for one planned round.

    Attributes
    ----------
    round_lookahead : int
        Rounds simulated per lookahead trial.
    round_attempts : int
        Independent lookahead trials per planned round.
    match_generations : int
        Matchup candidates scored per generated round.
    unique_partitions_per_court : int
        Distinct team partitions explored per four players on the roster.
    team_generation_budget : int
        Maximum team partition attempts per generated round.
    sit_out_base_chance : float
        Pick chance of the front of the sit-out pool.
    matcher_iteration_count : int
        Swap passes after each grouping step of the pair matcher.
    matcher_final_iteration_count : int
        Swap passes over all groups once everyone is grouped.
    weights : ScoringWeights
        Exponents used by the scorers.
    """

    round_lookahead: int = DEFAULT_ROUND_LOOKAHEAD
    round_attempts: int = DEFAULT_ROUND_ATTEMPTS
    match_generations: int = DEFAULT_MATCH_GENERATIONS
    unique_partitions_per_court: int = DEFAULT_UNIQUE_PARTITIONS_PER_COURT
    team_generation_budget: int = DEFAULT_TEAM_GENERATION_BUDGET
    sit_out_base_chance: float = DEFAULT_SIT_OUT_BASE_CHANCE
    matcher_iteration_count: int = DEFAULT_MATCHER_ITERATION_COUNT
    matcher_final_iteration_count: int = DEFAULT_MATCHER_FINAL_ITERATION_COUNT
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    def __post_init__(self):
        for name in (
            "round_lookahead",
            "round_attempts",
            "match_generations",
            "unique_partitions_per_court",
            "team_generation_budget",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise InvalidConfigurationException(
                    f"{name} must be a positive integer, got {value!r}"
                )
        for name in ("matcher_iteration_count", "matcher_final_iteration_count"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise InvalidConfigurationException(
                    f"{name} must be a non-negative integer, got {value!r}"
                )
        if not 0.0 < self.sit_out_base_chance <= 1.0:
            raise InvalidConfigurationException(
                f"sit_out_base_chance must be in (0, 1], got {self.sit_out_base_chance}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "round_lookahead": self.round_lookahead,
            "round_attempts": self.round_attempts,
            "match_generations": self.match_generations,
            "unique_partitions_per_court": self.unique_partitions_per_court,
            "team_generation_budget": self.team_generation_budget,
            "sit_out_base_chance": self.sit_out_base_chance,
            "matcher_iteration_count": self.matcher_iteration_count,
            "matcher_final_iteration_count": self.matcher_final_iteration_count,
            "weights": self.weights.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShuffleConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            round_lookahead=data.get("round_lookahead", DEFAULT_ROUND_LOOKAHEAD),
            round_attempts=data.get("round_attempts", DEFAULT_ROUND_ATTEMPTS),
            match_generations=data.get("match_generations", DEFAULT_MATCH_GENERATIONS),
            unique_partitions_per_court=data.get(
                "unique_partitions_per_court", DEFAULT_UNIQUE_PARTITIONS_PER_COURT
            ),
            team_generation_budget=data.get(
                "team_generation_budget", DEFAULT_TEAM_GENERATION_BUDGET
            ),
            sit_out_base_chance=data.get(
                "sit_out_base_chance", DEFAULT_SIT_OUT_BASE_CHANCE
            ),
            matcher_iteration_count=data.get(
                "matcher_iteration_count", DEFAULT_MATCHER_ITERATION_COUNT
            ),
            matcher_final_iteration_count=data.get(
                "matcher_final_iteration_count", DEFAULT_MATCHER_FINAL_ITERATION_COUNT
            ),
            weights=ScoringWeights.from_dict(data.get("weights", {})),
        )
