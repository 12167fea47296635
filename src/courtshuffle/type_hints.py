"""Type hints used in Court Shuffle."""

from typing import Callable, Dict, List, Sequence, Tuple

# Opaque stable identifier of a player
PlayerId = str

# Unordered partner pair, stored sorted
Team = Tuple[PlayerId, PlayerId]
# Two opposing teams on one court
Match = Tuple[Team, Team]
# Canonical "a b|c d" string for a match
MatchIdentifier = str
# Match identifier -> times played
MatchCounts = Dict[MatchIdentifier, int]

# Square preference matrix; row i holds member i's score for every member
PreferenceMatrix = Sequence[Sequence[float]]

# Sit-outs (sorted) and the shuffled players left to pair
SitOutSelection = Tuple[List[PlayerId], List[PlayerId]]

# Cooperative scheduling point invoked between generation attempts
Checkpoint = Callable[[], None]
