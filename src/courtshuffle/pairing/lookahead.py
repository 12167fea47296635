"""Lookahead planner: pick the next round by simulating a few rounds ahead.

Every call to the round generator is randomized, so independent trials
explore different futures. The planner keeps the first round of the trial
whose future looks best, which steers away from pairings that look fine now
but leave poor options two rounds later.
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

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from courtshuffle.exceptions import GenerationExhaustedException
from courtshuffle.models.heuristics import PlayerHeuristicsDictionary
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.pairing.heuristics import (
    age_heuristics,
    compute_heuristics,
    count_matches,
)
from courtshuffle.pairing.round_generator import generate_round
from courtshuffle.type_hints import Checkpoint, MatchCounts, PlayerId
from courtshuffle.utils import setup_logger
from courtshuffle.utils.validation import ensure_valid_roster

logger = setup_logger(__name__)


@dataclass
class TrialScore:
    """Accumulated scores of one simulated future (lower is better)."""

    duplicates: float = 0.0
    partner_score: float = 0.0
    opponent_score: float = 0.0
    rounds: List[Round] = field(default_factory=list)

    @property
    def key(self) -> Tuple[float, float, float]:
        """Fewest duplicates, then partner score, then opponent score."""
        return (self.duplicates, self.partner_score, self.opponent_score)


def _run_trial(
    rounds: Sequence[Round],
    roster: List[PlayerId],
    courts: int,
    volunteers: Optional[Sequence[PlayerId]],
    heuristics: PlayerHeuristicsDictionary,
    match_counts: MatchCounts,
    config: ShuffleConfig,
    rng: random.Random,
    checkpoint: Optional[Checkpoint],
) -> TrialScore:
    trial = TrialScore()
    lookahead = config.round_lookahead

    for step in range(lookahead):
        # Only the round being planned honours this round's volunteers.
        try:
            new_round, diagnostics = generate_round(
                list(rounds) + trial.rounds,
                roster,
                courts,
                volunteers if step == 0 else None,
                heuristics,
                match_counts=match_counts,
                config=config,
                rng=rng,
                checkpoint=checkpoint,
            )
        except GenerationExhaustedException as e:
            logger.warning(f"Lookahead trial truncated at step {step + 1}: {e}")
            break

        match_counts, new_duplicates = count_matches([new_round], match_counts)
        heuristics = compute_heuristics(
            [new_round], roster, age_heuristics(heuristics)
        )
        trial.rounds.append(new_round)

        # Near-term partner fairness and duplicates matter most.
        weight = lookahead - step
        trial.partner_score += diagnostics.team_score * weight
        trial.duplicates += new_duplicates * weight
        trial.opponent_score += diagnostics.match_score

    return trial


def plan_next_round(
    rounds: Sequence[Round],
    roster: Sequence[PlayerId],
    courts: int,
    volunteers: Optional[Sequence[PlayerId]] = None,
    *,
    config: Optional[ShuffleConfig] = None,
    rng: Optional[random.Random] = None,
    checkpoint: Optional[Checkpoint] = None,
) -> Round:
    """Plan the next round, looking a few rounds ahead.

    Parameters
    ----------
        rounds: Round history, oldest first
        roster: Players on the current roster
        courts: Courts available
        volunteers: Players asking to sit out the next round
        config: Search budgets and scoring weights
        rng: Random source
        checkpoint: Called before every trial and generation attempt

    Returns
    -------
        The first round of the best simulated future

    Raises
    ------
        InvalidRosterException: Fewer than four players or no courts
        GenerationExhaustedException: No trial produced a single round
    """
    roster = ensure_valid_roster(roster, courts)
    config = config or ShuffleConfig()
    rng = rng or random.Random()

    heuristics = compute_heuristics(rounds, roster)
    match_counts, _ = count_matches(rounds)

    best: Optional[TrialScore] = None
    for attempt in range(config.round_attempts):
        if checkpoint is not None:
            checkpoint()
        trial = _run_trial(
            rounds,
            roster,
            courts,
            volunteers,
            heuristics,
            match_counts,
            config,
            rng,
            checkpoint,
        )
        if not trial.rounds:
            continue
        logger.debug(f"Trial {attempt}: {trial.key}")
        if best is None or trial.key < best.key:
            best = trial

    if best is None:
        raise GenerationExhaustedException(
            f"No round could be generated for {len(roster)} players on {courts} courts"
        )

    logger.info(
        f"Planned round {len(rounds) + 1}: duplicates {best.duplicates}, "
        f"partner score {best.partner_score}, opponent score {best.opponent_score:.2f}"
    )
    return best.rounds[0]
