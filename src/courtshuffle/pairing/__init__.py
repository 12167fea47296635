"""Pairing engine: heuristics, sit-outs, scoring, matching and planning."""

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

from courtshuffle.pairing.heuristics import (
    age_heuristics,
    compute_heuristics,
    count_matches,
    match_identifier,
)
from courtshuffle.pairing.lookahead import plan_next_round
from courtshuffle.pairing.pair_matcher import PairMatcher, match_pairs
from courtshuffle.pairing.preferences import (
    opponent_score,
    partner_preferences,
    partner_score,
    team_preferences,
)
from courtshuffle.pairing.round_generator import RoundDiagnostics, generate_round
from courtshuffle.pairing.sitouts import (
    pick_from_list_bias_beginning,
    select_sit_outs,
    sit_out_count,
)

__all__ = [
    "PairMatcher",
    "RoundDiagnostics",
    "age_heuristics",
    "compute_heuristics",
    "count_matches",
    "generate_round",
    "match_identifier",
    "match_pairs",
    "opponent_score",
    "partner_preferences",
    "partner_score",
    "pick_from_list_bias_beginning",
    "plan_next_round",
    "select_sit_outs",
    "sit_out_count",
    "team_preferences",
]
