"""Court Shuffle: fair partner and opponent rotations for doubles play."""

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

from courtshuffle.controllers.session import ShuffleSession
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ScoringWeights, ShuffleConfig
from courtshuffle.pairing.heuristics import compute_heuristics
from courtshuffle.pairing.lookahead import plan_next_round
from courtshuffle.pairing.round_generator import generate_round
from courtshuffle.utils.stats import fairness_report
from courtshuffle.worker import ShuffleWorker

__version__ = "0.1.0"

__all__ = [
    "Round",
    "ScoringWeights",
    "ShuffleConfig",
    "ShuffleSession",
    "ShuffleWorker",
    "compute_heuristics",
    "fairness_report",
    "generate_round",
    "plan_next_round",
]
