"""Sit-out selection: who rests this round."""

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
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from courtshuffle.constants import DEFAULT_SIT_OUT_BASE_CHANCE, PLAYERS_PER_COURT
from courtshuffle.models.heuristics import PlayerHeuristicsDictionary
from courtshuffle.type_hints import PlayerId, SitOutSelection
from courtshuffle.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def sit_out_count(player_count: int, courts: int) -> int:
    """Number of players who cannot be placed on a court."""
    capacity = courts * PLAYERS_PER_COURT
    if player_count > capacity:
        return player_count - capacity
    return player_count % PLAYERS_PER_COURT


def pick_from_list_bias_beginning(
    items: Sequence[T],
    count: int,
    rng: Optional[random.Random] = None,
    base_chance: float = DEFAULT_SIT_OUT_BASE_CHANCE,
) -> Tuple[List[T], List[T]]:
    """Randomly pick ``count`` items, favouring the front of the list.

    The chance of picking the item at position ``i`` of ``n`` remaining tapers
    linearly, e.g. 7/7 * 60% for the first of seven and 1/7 * 60% for the last.
    The walk wraps around until enough items are picked.

    Returns:
        The picked items and the remaining items, both in list order

    Raises:
        ValueError: If more items are requested than the list holds
    """
    if count > len(items):
        raise ValueError(f"Cannot pick {count} items from a list of {len(items)}")
    if count <= 0:
        return [], list(items)
    if count == len(items):
        return list(items), []

    rng = rng or random.Random()
    remaining = list(items)
    picked: List[T] = []
    index = 0
    while len(picked) < count:
        chance = (len(remaining) - index) / len(remaining) * base_chance
        if rng.random() < chance:
            # The next item slides into this index
            picked.append(remaining.pop(index))
        else:
            index += 1
        index %= len(remaining)
    return picked, remaining


def _shuffled(items: Iterable[T], rng: random.Random) -> List[T]:
    result = list(items)
    rng.shuffle(result)
    return result


def select_sit_outs(
    heuristics: PlayerHeuristicsDictionary,
    roster: Sequence[PlayerId],
    courts: int,
    volunteers: Optional[Sequence[PlayerId]] = None,
    rng: Optional[random.Random] = None,
    base_chance: float = DEFAULT_SIT_OUT_BASE_CHANCE,
) -> SitOutSelection:
    """Choose which players sit out.

    Volunteers always sit out. Among the rest, players who have sat out the
    fewest times go first, preferring those who have waited longest.

    Parameters
    ----------
        heuristics: Heuristics covering every roster player
        roster: Players on the current roster
        courts: Courts available this round
        volunteers: Players asking to sit out this round
        rng: Random source
        base_chance: Pick chance of the front of the pool

    Returns
    -------
        Sit-outs sorted by id, and the remaining players shuffled
    """
    rng = rng or random.Random()
    roster_ids = set(roster)
    volunteers = list(dict.fromkeys(volunteers or []))
    unknown = [v for v in volunteers if v not in roster_ids]
    if unknown:
        logger.warning(f"Ignoring volunteers not on the roster: {', '.join(unknown)}")
    volunteer_ids = {v for v in volunteers if v in roster_ids}

    players = [p for p in roster if p not in volunteer_ids]
    needed = sit_out_count(len(players), courts)

    # Everyone starts with the same rounds since sitting out, so shuffle first.
    in_order_of_sit_out = sorted(
        _shuffled(players, rng),
        key=lambda p: heuristics[p].rounds_since_sit_out,
        reverse=True,
    )

    least_sit_outs = min((heuristics[p].sit_out_count for p in players), default=0)
    eligible = [
        p for p in in_order_of_sit_out if heuristics[p].sit_out_count == least_sit_outs
    ]
    already_sat_out = [
        p for p in in_order_of_sit_out if heuristics[p].sit_out_count != least_sit_outs
    ]

    # When the sit-outs use up everyone eligible, take them all and top up from the rest.
    mandatory = eligible if needed >= len(eligible) else []
    pool = already_sat_out if mandatory else eligible
    picked, remaining = pick_from_list_bias_beginning(
        pool, needed - len(mandatory), rng=rng, base_chance=base_chance
    )

    sit_outs = sorted(volunteer_ids.union(mandatory, picked))
    playing = _shuffled(remaining + ([] if mandatory else already_sat_out), rng)
    logger.debug(
        f"Sit-outs {sit_outs} ({len(volunteer_ids)} volunteered, {len(mandatory)} mandatory)"
    )
    return sit_outs, playing
