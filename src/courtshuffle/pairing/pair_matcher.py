"""Pair matcher: split members into pairs that like each other.

A generalised stable-roommates approach. Exact stable matchings need not
exist for arbitrary scores, so this is a bounded local search instead:

1. Seed half of the members (shuffled) as singleton groups.
2. The other members propose to incomplete groups in order of how much they
   like the occupants; each group tentatively keeps the proposer its
   occupants like best (deferred acceptance).
3. Commit the tentative holders and polish the incomplete groups with swaps.
4. Once everyone is grouped, polish all groups with more swap passes.

Members are handled as dense integer indices into an arena: each group is a
fixed two-slot array and proposal state is a flat ``member x group`` array.
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
from typing import Generic, List, Optional, Sequence, TypeVar

from courtshuffle.constants import (
    DEFAULT_MATCHER_FINAL_ITERATION_COUNT,
    DEFAULT_MATCHER_ITERATION_COUNT,
)
from courtshuffle.exceptions import PairingDeadlockException
from courtshuffle.type_hints import PreferenceMatrix
from courtshuffle.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")

EMPTY = -1
GROUP_SIZE = 2


class PairMatcher(Generic[T]):
    """Approximately maximise the summed mutual preference of pairs.

    Args:
        members: Items to pair; must be sortable for canonical output
        preferences: Square matrix, ``preferences[i][j]`` is how much member
            i wants member j. The diagonal is ignored.
        rng: Random source for the initial shuffle
        iteration_count: Swap passes after each grouping step
        final_iteration_count: Swap passes over all groups at the end
    """

    def __init__(
        self,
        members: Sequence[T],
        preferences: PreferenceMatrix,
        rng: Optional[random.Random] = None,
        iteration_count: int = DEFAULT_MATCHER_ITERATION_COUNT,
        final_iteration_count: int = DEFAULT_MATCHER_FINAL_ITERATION_COUNT,
    ):
        self.members: List[T] = list(members)
        size = len(self.members)
        if len(preferences) != size or any(len(row) != size for row in preferences):
            raise ValueError(
                f"Preference matrix must be {size}x{size} for {size} members"
            )
        self.preferences = [[float(score) for score in row] for row in preferences]
        self.group_count = size // GROUP_SIZE
        self.iteration_count = iteration_count
        self.final_iteration_count = final_iteration_count
        self._rng = rng or random.Random()

        self._slots: List[List[int]] = []
        self._ungrouped: List[int] = []
        self._unfilled: List[int] = []
        self._filled: List[int] = []

        self._setup_random_groups()

    def _setup_random_groups(self) -> None:
        order = list(range(len(self.members)))
        self._rng.shuffle(order)
        for member in order[: self.group_count]:
            self._unfilled.append(self._new_group(member))
        self._ungrouped = order[self.group_count :]

    def _new_group(self, member: int) -> int:
        self._slots.append([member, EMPTY])
        return len(self._slots) - 1

    def _occupants(self, group: int) -> List[int]:
        return [member for member in self._slots[group] if member != EMPTY]

    def _place(self, group: int, members: Sequence[int]) -> None:
        self._slots[group] = list(members) + [EMPTY] * (GROUP_SIZE - len(members))

    def member_preference_for_group(self, member: int, occupants: Sequence[int]) -> float:
        """Mean preference of ``member`` for the occupants of a group."""
        if not occupants:
            return 0.0
        return sum(self.preferences[member][o] for o in occupants) / len(occupants)

    def group_preference_for_member(self, member: int, occupants: Sequence[int]) -> float:
        """Mean preference of the occupants of a group for ``member``."""
        if not occupants:
            return 0.0
        return sum(self.preferences[o][member] for o in occupants) / len(occupants)

    def pair_score(self, occupants: Sequence[int]) -> float:
        """Mutual preference of a complete pair; 0 for anything else."""
        if len(occupants) != GROUP_SIZE:
            return 0.0
        first, second = occupants
        return (self.preferences[first][second] + self.preferences[second][first]) / 2

    @property
    def net_score(self) -> float:
        """Mean pair score across completed groups."""
        if not self._filled:
            return 0.0
        total = sum(self.pair_score(self._occupants(g)) for g in self._filled)
        return total / len(self._filled)

    def _add_one_member(self) -> int:
        """Run one round of proposals; return how many members were placed."""
        ungrouped = list(self._ungrouped)
        unfilled = self._unfilled
        group_total = len(unfilled)

        proposed = [False] * (len(ungrouped) * group_total)
        temp_grouped = [False] * len(ungrouped)
        temp_member = [EMPTY] * group_total
        temp_score: List[Optional[float]] = [None] * group_total

        preference_order: List[List[int]] = []
        for member in ungrouped:
            scores = [
                self.member_preference_for_group(member, self._occupants(g))
                for g in unfilled
            ]
            preference_order.append(
                sorted(range(group_total), key=lambda k: scores[k], reverse=True)
            )

        while not all(temp_grouped):
            for u, member in enumerate(ungrouped):
                if temp_grouped[u]:
                    continue
                row = u * group_total
                # Proposed everywhere already, so give up on this step.
                if all(proposed[row : row + group_total]):
                    temp_grouped[u] = True
                    continue

                for k in preference_order[u]:
                    if proposed[row + k]:
                        continue
                    proposed[row + k] = True
                    score = self.group_preference_for_member(
                        member, self._occupants(unfilled[k])
                    )
                    if temp_score[k] is None or score > temp_score[k]:
                        if temp_member[k] != EMPTY:
                            temp_grouped[temp_member[k]] = False
                        temp_member[k] = u
                        temp_score[k] = score
                        temp_grouped[u] = True
                        break

        placed = 0
        for k, group in enumerate(unfilled):
            if temp_member[k] == EMPTY:
                continue
            member = ungrouped[temp_member[k]]
            self._place(group, self._occupants(group) + [member])
            self._ungrouped.remove(member)
            placed += 1

        self._optimize(self._unfilled, self.iteration_count)

        still_unfilled = []
        for group in self._unfilled:
            if len(self._occupants(group)) == GROUP_SIZE or not self._ungrouped:
                self._filled.append(group)
            else:
                still_unfilled.append(group)
        self._unfilled = still_unfilled
        return placed

    def _optimize(self, groups: Sequence[int], iteration_count: int) -> None:
        """Swap members between groups while it strictly improves their scores."""
        for _ in range(iteration_count):
            for group in groups:
                for member in tuple(self._occupants(group)):
                    swapped = False
                    for other in groups:
                        if swapped:
                            break
                        if other == group:
                            continue
                        for other_member in tuple(self._occupants(other)):
                            new_group = [
                                m for m in self._occupants(group) if m != member
                            ] + [other_member]
                            new_other = [
                                m for m in self._occupants(other) if m != other_member
                            ] + [member]

                            old_score = self.pair_score(
                                self._occupants(group)
                            ) + self.pair_score(self._occupants(other))
                            new_score = self.pair_score(new_group) + self.pair_score(
                                new_other
                            )
                            if new_score > old_score:
                                self._place(group, new_group)
                                self._place(other, new_other)
                                swapped = True
                                break

    def solve(self) -> List[List[T]]:
        """Group every member and return the groups.

        Raises:
            PairingDeadlockException: If a proposal round places nobody
        """
        while self._ungrouped:
            if not self._unfilled:
                # Odd member out
                for member in self._ungrouped:
                    self._filled.append(self._new_group(member))
                self._ungrouped = []
                break
            if not self._add_one_member():
                raise PairingDeadlockException(
                    f"No proposals accepted with {len(self._ungrouped)} members ungrouped"
                )

        self._filled.extend(self._unfilled)
        self._unfilled = []
        self._optimize(self._filled, self.final_iteration_count)
        logger.debug(
            f"Paired {len(self.members)} members, mean pair score {self.net_score:.2f}"
        )
        return self.solved_groups

    @property
    def solved_groups(self) -> List[List[T]]:
        """Members of each completed group, sorted."""
        return [
            sorted(self.members[m] for m in self._occupants(group))
            for group in self._filled
        ]


def match_pairs(
    members: Sequence[T],
    preferences: PreferenceMatrix,
    rng: Optional[random.Random] = None,
    iteration_count: int = DEFAULT_MATCHER_ITERATION_COUNT,
    final_iteration_count: int = DEFAULT_MATCHER_FINAL_ITERATION_COUNT,
) -> List[List[T]]:
    """Partition ``members`` into pairs (plus one singleton if odd).

    See :class:`PairMatcher`.
    """
    matcher = PairMatcher(
        members,
        preferences,
        rng=rng,
        iteration_count=iteration_count,
        final_iteration_count=final_iteration_count,
    )
    return matcher.solve()
