"""Data model for a round of doubles play."""

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
from typing import Any, Dict, Iterable, List, Sequence

from courtshuffle.constants import KEY_MATCHES, KEY_SIT_OUTS
from courtshuffle.type_hints import Match, PlayerId, Team


def make_team(first: PlayerId, second: PlayerId) -> Team:
    """Build a team in canonical (sorted) order."""
    if first == second:
        raise ValueError(f"A team needs two distinct players, got {first!r} twice")
    return (first, second) if first <= second else (second, first)


def make_match(team_a: Sequence[PlayerId], team_b: Sequence[PlayerId]) -> Match:
    """Build a match from two player pairs in canonical order."""
    first, second = sorted((make_team(*team_a), make_team(*team_b)))
    return (first, second)


@dataclass
class Round:
    """One generated assignment of matches and sit-outs.

    Attributes
    ----------
    matches : list of Match
        One entry per court in use; each is a pair of teams.
    sit_outs : list of str
        Ids of the players sitting this round out, sorted.
    """

    matches: List[Match] = field(default_factory=list)
    sit_outs: List[PlayerId] = field(default_factory=list)

    @property
    def teams(self) -> List[Team]:
        """All teams playing this round."""
        return [team for match in self.matches for team in match]

    @property
    def players(self) -> List[PlayerId]:
        """All players on court this round."""
        return [player for team in self.teams for player in team]

    def covers(self, roster: Iterable[PlayerId]) -> bool:
        """Check that players and sit-outs partition the roster exactly."""
        everyone = self.players + list(self.sit_outs)
        return len(everyone) == len(set(everyone)) and set(everyone) == set(roster)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            KEY_MATCHES: [[list(team) for team in match] for match in self.matches],
            KEY_SIT_OUTS: list(self.sit_outs),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            matches=[make_match(*match) for match in data.get(KEY_MATCHES, [])],
            sit_outs=[str(player) for player in data.get(KEY_SIT_OUTS, [])],
        )
