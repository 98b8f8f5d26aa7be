"""Roster and round structure validation.

Provides the player-count gate that decides which formats and court counts
a roster can play, plus structural checks on rounds handed to the engine.
"""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
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

from typing import Optional, Sequence

from courtpairing.constants import (
    AMERICANO_MAX_REST_SLOTS,
    FORMAT_AMERICANO,
    FORMAT_WINNERS_COURT,
    PLAYERS_PER_COURT,
)
from courtpairing.exceptions import (
    InvalidRosterSize,
    MalformedRoundState,
    UnsupportedFormat,
)
from courtpairing.models.tournament.round_state import RoundState


class RosterValidation:
    """Result of a roster size check.

    Attributes:
        success: Whether the roster can be scheduled
        error: Human-readable reason when it cannot
    """

    def __init__(
        self,
        success: bool,
        error: Optional[str] = None,
        count: Optional[int] = None,
        format: Optional[str] = None,
        num_courts: Optional[int] = None,
    ):
        self.success = success
        self.error = error
        self.count = count
        self.format = format
        self.num_courts = num_courts

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return "RosterValidation(VALID)"
        return f"RosterValidation(INVALID, {self.error!r})"

    def raise_for_error(self) -> None:
        """Raise InvalidRosterSize if the check failed."""
        if not self.success:
            raise InvalidRosterSize(
                self.error or "Invalid roster size",
                count=self.count,
                format=self.format,
                num_courts=self.num_courts,
            )


# ========== Player Count ==========


def validate_player_count_for_format(
    count: int, format: str, num_courts: int
) -> RosterValidation:
    """Check that ``count`` players can fill ``num_courts`` courts.

    Winner's Court needs exactly four players per court. Americano needs at
    least four per court and absorbs one extra player through a rotating
    rest slot.

    Args:
        count: Number of active players
        format: Tournament format tag
        num_courts: Number of courts in play

    Returns:
        RosterValidation with the check status

    Example:
        >>> bool(validate_player_count_for_format(9, "americano", 2))
        True
    """

    def fail(message: str) -> RosterValidation:
        return RosterValidation(
            False, message, count=count, format=format, num_courts=num_courts
        )

    if num_courts < 1:
        return fail("At least one court is required")

    required = num_courts * PLAYERS_PER_COURT
    court_word = "court" if num_courts == 1 else "courts"

    if format == FORMAT_WINNERS_COURT:
        if count != required:
            return fail(
                f"Winners Court requires exactly {required} players "
                f"for {num_courts} {court_word}"
            )
        return RosterValidation(True, count=count, format=format, num_courts=num_courts)

    if format == FORMAT_AMERICANO:
        if count < required:
            return fail(
                f"Americano with {num_courts} court(s) needs at least "
                f"{required} players"
            )
        if count > required + AMERICANO_MAX_REST_SLOTS:
            return fail(
                "Americano supports up to one rotating rest slot. "
                f"With {num_courts} court(s), roster {required} or "
                f"{required + AMERICANO_MAX_REST_SLOTS} players."
            )
        return RosterValidation(True, count=count, format=format, num_courts=num_courts)

    raise UnsupportedFormat(format)


# ========== Round Structure ==========


def validate_round_state(round_state: RoundState) -> None:
    """Check the structural invariants of a round.

    Raises:
        MalformedRoundState: On duplicate players, court numbers that are not
            ``1..n``, a player on both teams, or a half-entered or
            negative score
    """
    rnum = round_state.round_num
    if rnum < 1:
        raise MalformedRoundState(f"Round number must be positive, got {rnum}")

    court_nums = [court.court_num for court in round_state.courts]
    if court_nums != list(range(1, len(court_nums) + 1)):
        raise MalformedRoundState(
            f"Round {rnum} courts must be numbered 1..{len(court_nums)}, "
            f"got {court_nums}"
        )

    seen = set()
    for court in round_state.courts:
        if len(court.team_a) != 2 or len(court.team_b) != 2:
            raise MalformedRoundState(
                f"Round {rnum} court {court.court_num} must have two teams of two"
            )
        if set(court.team_a) & set(court.team_b) or len(set(court.players)) != 4:
            raise MalformedRoundState(
                f"Round {rnum} court {court.court_num} repeats a player"
            )
        if (court.score_a is None) != (court.score_b is None):
            raise MalformedRoundState(
                f"Round {rnum} court {court.court_num} has only one score entered"
            )
        if court.is_decided and min(court.score_a, court.score_b) < 0:
            raise MalformedRoundState(
                f"Round {rnum} court {court.court_num} has a negative score"
            )
        for pid in court.players:
            if pid in seen:
                raise MalformedRoundState(
                    f"Player {pid} appears on more than one court in round {rnum}"
                )
            seen.add(pid)


def validate_history(history: Sequence[RoundState]) -> None:
    """Check that a round history is oldest first with contiguous numbers.

    Raises:
        MalformedRoundState: If round numbers are out of order or skip
    """
    previous = None
    for round_state in history:
        validate_round_state(round_state)
        if previous is not None and round_state.round_num != previous + 1:
            raise MalformedRoundState(
                f"Round {round_state.round_num} follows round {previous}"
            )
        previous = round_state.round_num
