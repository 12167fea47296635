"""Per-player interaction statistics derived from round history."""

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

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from courtshuffle.constants import INFINITY
from courtshuffle.type_hints import PlayerId

# Statistics kept per opponent, in the order they are reported
RECORD_FIELDS: Tuple[str, ...] = (
    "played_with_count",
    "rounds_since_played_with",
    "played_against_count",
    "rounds_since_played_against",
)
# Statistics counting rounds since an event; they default to INFINITY
SINCE_FIELDS: Tuple[str, ...] = (
    "rounds_since_played_with",
    "rounds_since_played_against",
)


@dataclass
class PlayerRecords:
    """One statistic of a player against every other player.

    Attributes
    ----------
    per_opponent : dict of str to int
        Value of the statistic for each other player.
    min : int
        Smallest value across the other players on the current roster.
    max : int
        Largest value across the other players on the current roster.
    """

    per_opponent: Dict[PlayerId, int] = field(default_factory=dict)
    min: int = 0
    max: int = 0

    def __getitem__(self, player_id: PlayerId) -> int:
        return self.per_opponent[player_id]

    def __setitem__(self, player_id: PlayerId, value: int) -> None:
        self.per_opponent[player_id] = value

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.per_opponent

    def __iter__(self) -> Iterator[PlayerId]:
        return iter(self.per_opponent)

    def __len__(self) -> int:
        return len(self.per_opponent)

    def get(self, player_id: PlayerId, default: Optional[int] = None) -> Optional[int]:
        return self.per_opponent.get(player_id, default)

    def copy(self) -> "PlayerRecords":
        return PlayerRecords(dict(self.per_opponent), self.min, self.max)


@dataclass
class PlayerHeuristics:
    """Everything the scorers know about one player.

    Attributes
    ----------
    played_with_count : PlayerRecords
        Times partnered with each other player.
    rounds_since_played_with : PlayerRecords
        Rounds since last partnering each other player (INFINITY if never).
    played_against_count : PlayerRecords
        Times faced each other player.
    rounds_since_played_against : PlayerRecords
        Rounds since last facing each other player (INFINITY if never).
    rounds_since_sit_out : int
        Rounds since the player last sat out (INFINITY if never).
    sit_out_count : int
        Rounds sat out, including the late-arrival allowance.
    """

    played_with_count: PlayerRecords = field(default_factory=PlayerRecords)
    rounds_since_played_with: PlayerRecords = field(default_factory=PlayerRecords)
    played_against_count: PlayerRecords = field(default_factory=PlayerRecords)
    rounds_since_played_against: PlayerRecords = field(default_factory=PlayerRecords)
    rounds_since_sit_out: int = INFINITY
    sit_out_count: int = 0

    def records(self, name: str) -> PlayerRecords:
        """Look up one of the per-opponent statistics by field name."""
        if name not in RECORD_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def copy(self) -> "PlayerHeuristics":
        return PlayerHeuristics(
            played_with_count=self.played_with_count.copy(),
            rounds_since_played_with=self.rounds_since_played_with.copy(),
            played_against_count=self.played_against_count.copy(),
            rounds_since_played_against=self.rounds_since_played_against.copy(),
            rounds_since_sit_out=self.rounds_since_sit_out,
            sit_out_count=self.sit_out_count,
        )


# Player id -> heuristics, rebuilt on demand
PlayerHeuristicsDictionary = Dict[PlayerId, PlayerHeuristics]
