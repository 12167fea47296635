"""Player data class."""

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

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


def _new_player_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Player:
    """A person on the session roster.

    Attributes
    ----------
    name : str
        Display name.
    id : str
        Stable identifier used by the pairing engine.
    """

    name: str
    id: str = field(default_factory=_new_player_id)

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"name": self.name, "id": self.id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(name=data["name"], id=str(data.get("id") or _new_player_id()))
