"""Type hints used in Court Pairing."""

from typing import Dict, List, Mapping, Sequence, Tuple

# Opaque player token (UUID string)
PlayerId = str

# A team is an ordered pair of players
Team = Tuple[PlayerId, PlayerId]

# Tournament formats
# Wildcard intensity levels
# Roster in seed order
Roster = Sequence[PlayerId]
# player id -> court number
CourtAssignment = Dict[PlayerId, int]
# player id -> rating
Ratings = Mapping[PlayerId, float]
# player id -> leaderboard points for one round
RoundPoints = Dict[PlayerId, int]
# Candidate court as (team A, team B)
CourtPairing = Tuple[Team, Team]
CourtPairings = List[CourtPairing]

#  LocalWords:  CourtPairing CourtAssignment
