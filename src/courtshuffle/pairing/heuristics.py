"""Heuristics engine: interaction statistics derived from round history.

Everything here is a pure function of its arguments. Heuristics are rebuilt
on every call; a previous snapshot can be aged and passed in to roll
statistics forward one simulated round at a time without replaying the
whole history.
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

from typing import Dict, List, Optional, Sequence, Set, Tuple

from courtshuffle.constants import INFINITY, MATCH_SEPARATOR, TEAM_SEPARATOR
from courtshuffle.models.heuristics import (
    RECORD_FIELDS,
    SINCE_FIELDS,
    PlayerHeuristics,
    PlayerHeuristicsDictionary,
    PlayerRecords,
)
from courtshuffle.models.round import Round
from courtshuffle.type_hints import Match, MatchCounts, MatchIdentifier, PlayerId


def _default_records(
    roster: Sequence[PlayerId],
    player: PlayerId,
    name: str,
    previous: Optional[PlayerRecords],
) -> PlayerRecords:
    """Records for every other roster player, carrying over a previous snapshot."""
    default = INFINITY if name in SINCE_FIELDS else 0
    records = PlayerRecords(min=default, max=default)
    for other in roster:
        if other == player:
            continue
        if previous is not None and other in previous:
            records[other] = previous[other]
        else:
            records[other] = default
    return records


def _default_heuristics(
    roster: Sequence[PlayerId],
    player: PlayerId,
    previous: Optional[PlayerHeuristicsDictionary],
) -> PlayerHeuristics:
    before = previous.get(player) if previous else None
    records = {
        name: _default_records(
            roster, player, name, before.records(name) if before else None
        )
        for name in RECORD_FIELDS
    }
    return PlayerHeuristics(
        rounds_since_sit_out=before.rounds_since_sit_out if before else INFINITY,
        sit_out_count=before.sit_out_count if before else 0,
        **records,
    )


def _record_meeting(
    heuristics: PlayerHeuristicsDictionary,
    first: PlayerId,
    second: PlayerId,
    count_field: str,
    since_field: str,
    rounds_ago: int,
) -> None:
    """Count a meeting both ways, keeping the most recent rounds-since value."""
    if first == second:
        return
    for player, subject in ((first, second), (second, first)):
        player_heuristics = heuristics.get(player)
        if player_heuristics is None:
            continue
        counts = player_heuristics.records(count_field)
        counts[subject] = counts.get(subject, 0) + 1
        since = player_heuristics.records(since_field)
        # Ignores worse values
        if rounds_ago < since.get(subject, INFINITY):
            since[subject] = rounds_ago


def _late_arrival_sit_outs(
    rounds: Sequence[Round], roster: Sequence[PlayerId]
) -> Dict[PlayerId, int]:
    """Sit-out counts for players who joined after the first round.

    A late player is treated as if they had already sat out once more than
    the least rested player at the moment they arrived, so they are not
    immediately first in line to sit out.
    """
    seen: Set[PlayerId] = set()
    sit_out_counts: Dict[PlayerId, int] = {}
    late: List[PlayerId] = []

    def see(player: PlayerId, index: int) -> None:
        if player in seen:
            return
        seen.add(player)
        if index != 0:
            sit_out_counts[player] = min(sit_out_counts.values(), default=0) + 1
            late.append(player)

    for index, round_ in enumerate(rounds):
        for player in round_.sit_outs:
            see(player, index)
            sit_out_counts[player] = sit_out_counts.get(player, 0) + 1
        for player in round_.players:
            see(player, index)
    # The roster is the round being planned
    for player in roster:
        see(player, len(rounds))

    return {player: sit_out_counts[player] for player in late}


def age_heuristics(
    heuristics: PlayerHeuristicsDictionary, rounds: int = 1
) -> PlayerHeuristicsDictionary:
    """Copy of a snapshot with every rounds-since value pushed back.

    Use before chaining ``rounds`` more rounds onto a snapshot with
    :func:`compute_heuristics`. Values never exceed INFINITY.
    """
    aged: PlayerHeuristicsDictionary = {}
    for player, player_heuristics in heuristics.items():
        copied = player_heuristics.copy()
        for name in SINCE_FIELDS:
            records = copied.records(name)
            for other in records:
                records[other] = min(records[other] + rounds, INFINITY)
        copied.rounds_since_sit_out = min(
            copied.rounds_since_sit_out + rounds, INFINITY
        )
        aged[player] = copied
    return aged


def compute_heuristics(
    rounds: Sequence[Round],
    roster: Sequence[PlayerId],
    previous: Optional[PlayerHeuristicsDictionary] = None,
) -> PlayerHeuristicsDictionary:
    """Get stats about who has played with and against whom, and sit-outs.

    Parameters
    ----------
        rounds: Round history, oldest first
        roster: Players on the current roster
        previous: Optional snapshot the statistics of ``rounds`` are added to,
            already aged by ``len(rounds)`` with :func:`age_heuristics`

    Returns
    -------
        Heuristics for every roster player. Neither ``rounds`` nor
        ``previous`` is modified.
    """
    roster = list(roster)
    heuristics: PlayerHeuristicsDictionary = {
        player: _default_heuristics(roster, player, previous) for player in roster
    }

    # Newest round first so rounds_ago counts up from 1
    for rounds_ago, round_ in enumerate(reversed(rounds), start=1):
        for player in round_.sit_outs:
            player_heuristics = heuristics.get(player)
            if player_heuristics is None:
                continue
            player_heuristics.rounds_since_sit_out = min(
                player_heuristics.rounds_since_sit_out, rounds_ago
            )
            player_heuristics.sit_out_count += 1
        for team_a, team_b in round_.matches:
            for first, second in (team_a, team_b):
                _record_meeting(
                    heuristics,
                    first,
                    second,
                    "played_with_count",
                    "rounds_since_played_with",
                    rounds_ago,
                )
            for a_player in team_a:
                for b_player in team_b:
                    _record_meeting(
                        heuristics,
                        a_player,
                        b_player,
                        "played_against_count",
                        "rounds_since_played_against",
                        rounds_ago,
                    )

    for player, count in _late_arrival_sit_outs(rounds, roster).items():
        if player in heuristics:
            heuristics[player].sit_out_count = count

    for player in roster:
        for name in RECORD_FIELDS:
            records = heuristics[player].records(name)
            values = [records.get(other, 0) for other in roster if other != player]
            records.min = min(values, default=INFINITY)
            records.max = max(values, default=0)

    return heuristics


def match_identifier(match: Match) -> MatchIdentifier:
    """Canonical id of a matchup, independent of team and player order."""
    teams = sorted(TEAM_SEPARATOR.join(sorted(team)) for team in match)
    return MATCH_SEPARATOR.join(teams)


def count_matches(
    rounds: Sequence[Round], previous: Optional[MatchCounts] = None
) -> Tuple[MatchCounts, int]:
    """Count how often each exact matchup occurred.

    Returns
    -------
        The updated counts (a new dict) and how many matches in ``rounds``
        had already been played before.
    """
    counts: MatchCounts = dict(previous) if previous else {}
    duplicates = 0
    for round_ in rounds:
        for match in round_.matches:
            key = match_identifier(match)
            played = counts.get(key, 0)
            if played:
                duplicates += 1
            counts[key] = played + 1
    return counts, duplicates
