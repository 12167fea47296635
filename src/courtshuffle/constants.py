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

# --- Constants ---

# Stands in for "never observed" so that comparative values can still be computed.
INFINITY = 9999

# Players per court (two teams of two)
PLAYERS_PER_COURT = 4
PLAYERS_PER_TEAM = 2
MIN_PLAYERS = PLAYERS_PER_COURT
MIN_COURTS = 1

# Lookahead planner
DEFAULT_ROUND_LOOKAHEAD = 3  # Rounds simulated per trial
DEFAULT_ROUND_ATTEMPTS = 20  # Independent trials per planned round

# Round generator
DEFAULT_MATCH_GENERATIONS = 4  # Matchup candidates per round
DEFAULT_UNIQUE_PARTITIONS_PER_COURT = 2  # Distinct team partitions explored per court
DEFAULT_TEAM_GENERATION_BUDGET = 100  # Hard cap on team partition attempts

# Sit-out selection
DEFAULT_SIT_OUT_BASE_CHANCE = 0.6  # Pick chance of the first item in the pool

# Pair matcher swap passes
DEFAULT_MATCHER_ITERATION_COUNT = 2
DEFAULT_MATCHER_FINAL_ITERATION_COUNT = 4

# Scoring weights
DEFAULT_PARTNER_COUNT_EXPONENT = 2.0
DEFAULT_OPPONENT_STALENESS_EXPONENT = 2.0
DEFAULT_REPEAT_MATCH_EXPONENT = 2.0
DEFAULT_DUPLICATE_PENALTY_EXPONENT = 2.0
DEFAULT_FREQUENCY_FLOOR = 0.5  # Multiplier for the most over-exposed pair

# Match identifiers
TEAM_SEPARATOR = " "
MATCH_SEPARATOR = "|"

# Serialized round keys
KEY_MATCHES = "matches"
KEY_SIT_OUTS = "sit_outs"

# Environment variable for the default log level
LOG_LEVEL_ENV = "COURT_SHUFFLE_LOG_LEVEL"
