"""Fairness statistics over a finished set of rounds."""

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

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from courtshuffle.models.round import Round
from courtshuffle.pairing.heuristics import compute_heuristics, count_matches
from courtshuffle.type_hints import PlayerId


def get_variance(values: Iterable[float]) -> float:
    """Population variance using Welford's online algorithm.

    Lower means the values are more similar; an empty input gives 0.
    """
    mean = 0.0
    m2 = 0.0
    count = 0
    for value in values:
        count += 1
        delta = value - mean
        mean += delta / count
        m2 += delta * (value - mean)
    return m2 / count if count else 0.0


@dataclass
class FairnessReport:
    """How evenly exposure was spread over a session.

    Attributes
    ----------
    partner_variance : float
        Variance of partner counts over all player pairs.
    opponent_variance : float
        Variance of opponent counts over all player pairs.
    sit_out_variance : float
        Variance of sit-out counts over players.
    max_played_with : int
        Most times any two players partnered.
    repeated_matches : int
        Matches that repeated an earlier exact matchup.
    """

    partner_variance: float
    opponent_variance: float
    sit_out_variance: float
    max_played_with: int
    repeated_matches: int

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "partner_variance": self.partner_variance,
            "opponent_variance": self.opponent_variance,
            "sit_out_variance": self.sit_out_variance,
            "max_played_with": self.max_played_with,
            "repeated_matches": self.repeated_matches,
        }


def fairness_report(rounds: Sequence[Round], roster: Sequence[PlayerId]) -> FairnessReport:
    """Summarise partner, opponent and sit-out exposure for a roster."""
    roster = list(roster)
    heuristics = compute_heuristics(rounds, roster)
    _, repeated = count_matches(rounds)

    partner_counts: List[int] = []
    opponent_counts: List[int] = []
    for index, player in enumerate(roster):
        for other in roster[index + 1 :]:
            partner_counts.append(heuristics[player].played_with_count[other])
            opponent_counts.append(heuristics[player].played_against_count[other])

    return FairnessReport(
        partner_variance=get_variance(partner_counts),
        opponent_variance=get_variance(opponent_counts),
        sit_out_variance=get_variance(h.sit_out_count for h in heuristics.values()),
        max_played_with=max(
            (h.played_with_count.max for h in heuristics.values()), default=0
        ),
        repeated_matches=repeated,
    )
