"""Preference scores for partners and opponents.

Scores are only meaningful relative to one another: they rank candidates for
the pair matcher and carry no absolute scale.
"""

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

from typing import List, Optional, Sequence

from courtshuffle.models.heuristics import PlayerHeuristicsDictionary
from courtshuffle.models.shuffle_config import ScoringWeights
from courtshuffle.pairing.heuristics import match_identifier
from courtshuffle.type_hints import MatchCounts, PlayerId, Team

_DEFAULT_WEIGHTS = ScoringWeights()


def partner_score(
    player: PlayerId,
    heuristics: PlayerHeuristicsDictionary,
    partner: PlayerId,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """How much does ``player`` want to partner ``partner``?

    Fewest partnerships matter most, then how long since the last one. Both
    terms are taken relative to the player's roster-wide minimum, which
    evens out the skew left by sit-outs.
    """
    weights = weights or _DEFAULT_WEIGHTS
    since_with = heuristics[player].rounds_since_played_with
    played_with = heuristics[player].played_with_count

    net_played_with = played_with[partner] - played_with.min
    net_since_partnered = since_with[partner] - since_with.min
    return net_since_partnered / (net_played_with ** weights.partner_count_exponent + 1)


def _desirability(
    player: PlayerId,
    target: PlayerId,
    heuristics: PlayerHeuristicsDictionary,
    weights: ScoringWeights,
) -> float:
    """Desire of ``player`` to face ``target``: long unseen, rarely seen."""
    player_heuristics = heuristics[player]
    since_against = player_heuristics.rounds_since_played_against
    since_with = player_heuristics.rounds_since_played_with
    played_with = player_heuristics.played_with_count
    played_against = player_heuristics.played_against_count

    maximum_games = (
        played_with.max - played_with.min + played_against.max - played_against.min
    ) or 1
    net_games = (
        played_with[target]
        - played_with.min
        + played_against[target]
        - played_against.min
    )
    # Over-exposed pairs are discouraged more as repeats pile up.
    floor = weights.frequency_floor
    frequency_multiplier = (1 - net_games / maximum_games) * (1 - floor) + floor

    staleness = since_against[target] - since_against.min
    if weights.count_partners_as_seen:
        staleness = min(staleness, since_with[target] - since_with.min)
    return staleness ** weights.opponent_staleness_exponent * frequency_multiplier


def opponent_score(
    team: Team,
    heuristics: PlayerHeuristicsDictionary,
    opponent: Team,
    match_counts: MatchCounts,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """How much does ``team`` want to play ``opponent``?

    Sums the desirability of the four cross pairs, then divides steeply by
    how often this exact matchup has already been played.
    """
    weights = weights or _DEFAULT_WEIGHTS
    repeated = match_counts.get(match_identifier((team, opponent)), 0)
    total = sum(
        _desirability(player, target, heuristics, weights)
        for player in team
        for target in opponent
    )
    return total / (repeated ** weights.repeat_match_exponent + 1)


def partner_preferences(
    players: Sequence[PlayerId],
    heuristics: PlayerHeuristicsDictionary,
    weights: Optional[ScoringWeights] = None,
) -> List[List[float]]:
    """Square matrix of partner scores; row i is player i's view of everyone."""
    return [
        [
            0.0 if i == j else partner_score(player, heuristics, partner, weights)
            for j, partner in enumerate(players)
        ]
        for i, player in enumerate(players)
    ]


def team_preferences(
    teams: Sequence[Team],
    heuristics: PlayerHeuristicsDictionary,
    match_counts: MatchCounts,
    weights: Optional[ScoringWeights] = None,
) -> List[List[float]]:
    """Square matrix of opponent scores; row i is team i's view of every team."""
    return [
        [
            0.0
            if i == j
            else opponent_score(team, heuristics, opponent, match_counts, weights)
            for j, opponent in enumerate(teams)
        ]
        for i, team in enumerate(teams)
    ]
