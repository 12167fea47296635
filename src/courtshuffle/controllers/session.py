"""Session management for a day of doubles play.

This module owns the roster, court count and round history of one session
and asks the lookahead planner for each new round.
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
from typing import Any, Dict, List, Optional, Sequence

from courtshuffle.exceptions import (
    InvalidRosterException,
    PlayerNotFoundException,
    RoundNotFoundException,
)
from courtshuffle.models.player import Player
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.pairing.lookahead import plan_next_round
from courtshuffle.type_hints import PlayerId
from courtshuffle.utils import setup_logger
from courtshuffle.utils.validation import validate_courts

logger = setup_logger(__name__)


class ShuffleSession:
    """Manages round progression for one play session.

    This class is responsible for:
    - Keeping the roster and court count
    - Tracking round history
    - Truncating and regenerating rounds after edits
    - Coordinating with the lookahead planner
    """

    def __init__(
        self,
        players: Optional[Sequence[Player]] = None,
        courts: int = 1,
        rounds: Optional[Sequence[Round]] = None,
        config: Optional[ShuffleConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the session.

        Args:
            players: Players on the roster
            courts: Number of courts available
            rounds: Existing round history, oldest first
            config: Planner budgets and scoring weights
            rng: Random source shared by every planned round
        """
        self.players: List[Player] = list(players or [])
        self.courts = self._checked_courts(courts)
        self.rounds: List[Round] = list(rounds or [])
        self.config = config or ShuffleConfig()
        self._rng = rng or random.Random()

    @staticmethod
    def _checked_courts(courts: int) -> int:
        result = validate_courts(courts)
        if not result:
            logger.error(result.error_message)
            raise InvalidRosterException(result.error_message)
        return result.sanitized_value

    @property
    def roster(self) -> List[PlayerId]:
        """Ids of the players on the roster, in join order."""
        return [player.id for player in self.players]

    @property
    def players_by_id(self) -> Dict[PlayerId, Player]:
        return {player.id: player for player in self.players}

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed), or 0 before the first round."""
        return len(self.rounds)

    def get_round(self, round_number: int) -> Optional[Round]:
        """Get a specific round.

        Args:
            round_number: The round number (1-indexed)

        Returns:
            The round, or None if invalid round number
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def find_player(self, name_or_id: str) -> Player:
        """Look up a player by id, then by case-insensitive name.

        Raises:
            PlayerNotFoundException: If nobody matches
        """
        by_id = self.players_by_id.get(name_or_id)
        if by_id is not None:
            return by_id
        wanted = name_or_id.casefold()
        for player in self.players:
            if player.name.casefold() == wanted:
                return player
        raise PlayerNotFoundException(f"No player named {name_or_id!r}")

    def _plan(
        self,
        rounds: Sequence[Round],
        roster: Sequence[PlayerId],
        courts: int,
        volunteers: Optional[Sequence[PlayerId]] = None,
    ) -> Round:
        return plan_next_round(
            rounds, roster, courts, volunteers, config=self.config, rng=self._rng
        )

    def new_game(self, names: Sequence[str], courts: int) -> Round:
        """Start over with a fresh roster and plan the first round.

        The current game is left untouched if the first round cannot be planned.
        """
        players = [Player(name=name) for name in names]
        courts = self._checked_courts(courts)
        first_round = self._plan([], [player.id for player in players], courts)

        self.players = players
        self.courts = courts
        self.rounds = [first_round]
        logger.info(f"New game with {len(players)} players on {courts} courts")
        return first_round

    def next_round(self, volunteers: Optional[Sequence[PlayerId]] = None) -> Round:
        """Plan the next round and add it to the history.

        Args:
            volunteers: Ids of players asking to sit out this round

        Returns:
            The new round

        Raises:
            InvalidRosterException: If the roster or court count cannot produce a round
            GenerationExhaustedException: If no round could be generated
        """
        new_round = self._plan(self.rounds, self.roster, self.courts, volunteers)
        self.rounds.append(new_round)
        logger.info(
            f"Created round {len(self.rounds)} with {len(new_round.matches)} matches, "
            f"{len(new_round.sit_outs)} sitting out"
        )
        return new_round

    def regenerate_round(
        self,
        round_number: int,
        volunteers: Optional[Sequence[PlayerId]] = None,
        courts: Optional[int] = None,
    ) -> Round:
        """Replace a round and drop every round after it.

        Args:
            round_number: The round to plan again (1-indexed)
            volunteers: Ids of players asking to sit out that round
            courts: New court count, kept for later rounds too

        Raises:
            RoundNotFoundException: If the round does not exist
            GenerationExhaustedException: If no round could be generated; the
                history and court count are then left as they were
        """
        if self.get_round(round_number) is None:
            logger.error(f"Cannot regenerate non-existent round {round_number}")
            raise RoundNotFoundException(f"Round {round_number} does not exist")

        new_courts = self.courts if courts is None else self._checked_courts(courts)
        kept = self.rounds[: round_number - 1]
        new_round = self._plan(kept, self.roster, new_courts, volunteers)

        dropped = len(self.rounds) - len(kept)
        self.courts = new_courts
        self.rounds = kept + [new_round]
        logger.info(f"Regenerated round {round_number}, dropped {dropped} rounds")
        return new_round

    def undo_last_round(self) -> bool:
        """Remove the last round.

        Returns:
            True if successful, False if there are no rounds
        """
        if not self.rounds:
            logger.warning("Cannot undo: no rounds exist")
            return False

        self.rounds.pop()
        logger.info(f"Undid round {len(self.rounds) + 1}")
        return True

    def add_player(self, name: str) -> Player:
        """Add a late arrival; they join from the next planned round."""
        player = Player(name=name)
        self.players.append(player)
        logger.info(f"Added {player.name} to the roster")
        return player

    def remove_player(self, name_or_id: str) -> Player:
        """Take a player off the roster; their history stays in past rounds."""
        player = self.find_player(name_or_id)
        self.players.remove(player)
        logger.info(f"Removed {player.name} from the roster")
        return player

    def set_courts(self, courts: int) -> None:
        """Change the court count for rounds planned from now on."""
        self.courts = self._checked_courts(courts)
        logger.info(f"Courts set to {self.courts}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize session to dictionary."""
        return {
            "players": [player.to_dict() for player in self.players],
            "courts": self.courts,
            "rounds": [round_.to_dict() for round_ in self.rounds],
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], rng: Optional[random.Random] = None
    ) -> "ShuffleSession":
        """Deserialize session from dictionary."""
        return cls(
            players=[Player.from_dict(p) for p in data.get("players", [])],
            courts=data.get("courts", 1),
            rounds=[Round.from_dict(r) for r in data.get("rounds", [])],
            config=ShuffleConfig.from_dict(data.get("config", {})),
            rng=rng,
        )
