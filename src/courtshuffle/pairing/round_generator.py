"""Round generator: one candidate round with its quality scores.

Phase A builds many team partitions and keeps the one that forces the fewest
players back together with their most frequent partner. Phase B pairs the
chosen teams into matches a few times and keeps the freshest matchups.
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

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from courtshuffle.constants import PLAYERS_PER_COURT, PLAYERS_PER_TEAM
from courtshuffle.exceptions import GenerationExhaustedException
from courtshuffle.models.heuristics import PlayerHeuristicsDictionary
from courtshuffle.models.round import Round, make_match, make_team
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.pairing.heuristics import compute_heuristics, count_matches
from courtshuffle.pairing.pair_matcher import match_pairs
from courtshuffle.pairing.preferences import partner_preferences, team_preferences
from courtshuffle.pairing.sitouts import select_sit_outs
from courtshuffle.type_hints import Checkpoint, Match, MatchCounts, PlayerId, Team
from courtshuffle.utils import setup_logger
from courtshuffle.utils.validation import ensure_valid_roster

logger = setup_logger(__name__)


@dataclass
class RoundDiagnostics:
    """Scores of the round picked by :func:`generate_round`.

    Attributes
    ----------
    team_score : float
        Players partnered at their personal maximum partner count (lower is better).
    match_score : float
        Opponent staleness across the roster, inflated by repeats (lower is better).
    """

    team_score: float
    match_score: float


def _noop() -> None:
    pass


def team_partition_score(
    teams: Sequence[Team], heuristics: PlayerHeuristicsDictionary
) -> int:
    """Count players partnering someone at their max (and not because it's their min)."""
    score = 0
    for first, second in teams:
        for player, partner in ((first, second), (second, first)):
            played_with = heuristics[player].played_with_count
            count = played_with[partner]
            if count == played_with.max and count != played_with.min:
                score += 1
    return score


def match_partition_score(
    matches: Sequence[Match],
    sit_outs: Sequence[PlayerId],
    roster: Sequence[PlayerId],
    heuristics: PlayerHeuristicsDictionary,
    match_counts: MatchCounts,
    duplicate_penalty_exponent: float = 2.0,
) -> float:
    """Score a set of matches by everyone's staleness against everyone else.

    Heuristics are rolled forward by the candidate round, so lower means
    players have met their opponents more evenly. New exact repeats inflate
    the score steeply.
    """
    candidate = Round(matches=list(matches), sit_outs=list(sit_outs))
    new_heuristics = compute_heuristics([candidate], roster, heuristics)
    _, new_duplicates = count_matches([candidate], match_counts)

    total = 0.0
    for player in roster:
        since_against = new_heuristics[player].rounds_since_played_against
        total += math.sqrt(
            sum(since_against[other] ** 2 for other in roster if other != player)
        )
    return (new_duplicates + 1) ** duplicate_penalty_exponent * total / len(roster)


def generate_round(
    rounds: Sequence[Round],
    roster: Sequence[PlayerId],
    courts: int,
    volunteers: Optional[Sequence[PlayerId]] = None,
    heuristics: Optional[PlayerHeuristicsDictionary] = None,
    *,
    match_counts: Optional[MatchCounts] = None,
    config: Optional[ShuffleConfig] = None,
    rng: Optional[random.Random] = None,
    checkpoint: Optional[Checkpoint] = None,
) -> Tuple[Round, RoundDiagnostics]:
    """Generate the next round given all previous rounds.

    Parameters
    ----------
        rounds: Round history, oldest first
        roster: Players on the current roster
        courts: Courts available
        volunteers: Players asking to sit out
        heuristics: Precomputed heuristics; derived from ``rounds`` if omitted
        match_counts: Precomputed match counts; derived from ``rounds`` if omitted
        config: Search budgets and scoring weights
        rng: Random source
        checkpoint: Called before every attempt; may raise to cancel

    Returns
    -------
        The best round found and its scores

    Raises
    ------
        InvalidRosterException: Fewer than four players or no courts
        GenerationExhaustedException: No team or match partition was produced
    """
    roster = ensure_valid_roster(roster, courts)
    config = config or ShuffleConfig()
    rng = rng or random.Random()
    checkpoint = checkpoint or _noop
    if heuristics is None:
        heuristics = compute_heuristics(rounds, roster)
    if match_counts is None:
        match_counts, _ = count_matches(rounds)

    # Phase A: teams
    target_unique = max(
        1, (len(roster) // PLAYERS_PER_COURT) * config.unique_partitions_per_court
    )
    seen_partitions: Set[Tuple[Team, ...]] = set()
    best_team_score = math.inf
    best_teams: List[Team] = []
    best_sit_outs: List[PlayerId] = []

    for attempt in range(config.team_generation_budget):
        if len(seen_partitions) >= target_unique:
            break
        checkpoint()
        sit_outs, playing = select_sit_outs(
            heuristics,
            roster,
            courts,
            volunteers,
            rng=rng,
            base_chance=config.sit_out_base_chance,
        )
        if len(playing) < PLAYERS_PER_COURT:
            raise GenerationExhaustedException(
                f"Only {len(playing)} players left to play after sit-outs"
            )

        groups = match_pairs(
            playing,
            partner_preferences(playing, heuristics, config.weights),
            rng=rng,
            iteration_count=config.matcher_iteration_count,
            final_iteration_count=config.matcher_final_iteration_count,
        )
        teams = sorted(make_team(*g) for g in groups if len(g) == PLAYERS_PER_TEAM)
        key = tuple(teams)
        if not teams or key in seen_partitions:
            continue
        seen_partitions.add(key)

        score = team_partition_score(teams, heuristics)
        logger.debug(f"Team attempt {attempt}: score {score}")
        if score < best_team_score:
            best_team_score = score
            best_teams = teams
            best_sit_outs = sit_outs

    if not best_teams:
        raise GenerationExhaustedException("No team partition found")

    # Phase B: matches
    best_match_score = math.inf
    best_matches: Optional[List[Match]] = None
    for attempt in range(config.match_generations):
        checkpoint()
        groups = match_pairs(
            best_teams,
            team_preferences(best_teams, heuristics, match_counts, config.weights),
            rng=rng,
            iteration_count=config.matcher_iteration_count,
            final_iteration_count=config.matcher_final_iteration_count,
        )
        matches = [make_match(*g) for g in groups if len(g) == 2]
        if not matches:
            continue

        score = match_partition_score(
            matches,
            best_sit_outs,
            roster,
            heuristics,
            match_counts,
            config.weights.duplicate_penalty_exponent,
        )
        logger.debug(f"Match attempt {attempt}: score {score:.2f}")
        if score < best_match_score:
            best_match_score = score
            best_matches = matches

    if best_matches is None:
        raise GenerationExhaustedException("No match partition found")

    return (
        Round(matches=sorted(best_matches), sit_outs=list(best_sit_outs)),
        RoundDiagnostics(team_score=best_team_score, match_score=best_match_score),
    )
