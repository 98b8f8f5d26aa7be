"""Round advancement for live events.

This module composes the round scheduler with the optional wildcard step
used when a club flags a round as a wildcard round.
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

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from courtpairing.constants import WILDCARD_CHAOTIC, WILDCARD_LIGHT, WILDCARD_MEDIUM
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.models.tournament.engine_options import AdvancePolicy
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.pairing.scheduler import next_round
from courtpairing.pairing.wildcard import WildcardTransform
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _identity(round_state: RoundState) -> RoundState:
    return round_state


# Light wildcards keep the schedule as is; medium and chaotic are hooks
# for clubs that register their own transforms.
DEFAULT_WILDCARD_TRANSFORMS: Mapping[str, WildcardTransform] = MappingProxyType(
    {
        WILDCARD_LIGHT: _identity,
        WILDCARD_MEDIUM: _identity,
        WILDCARD_CHAOTIC: _identity,
    }
)


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of advancing an event by one round.

    Attributes
    ----------
    next : RoundState
        The round to play next.
    wildcard_applied : bool
        True when the policy carried an active wildcard.
    partner_swaps : int
        Partnerships in ``next`` that differ from the plain schedule.
    """

    next: RoundState
    wildcard_applied: bool
    partner_swaps: int = 0


def count_partner_swaps(base: RoundState, result: RoundState) -> int:
    """Number of partnerships in ``result`` that ``base`` does not have."""
    base_pairs = {
        frozenset(team) for court in base.courts for team in (court.team_a, court.team_b)
    }
    return sum(
        1
        for court in result.courts
        for team in (court.team_a, court.team_b)
        if frozenset(team) not in base_pairs
    )


def advance_round(
    current: RoundState,
    history: Optional[Sequence[RoundState]] = None,
    policy: Optional[AdvancePolicy] = None,
    transforms: Optional[Mapping[str, WildcardTransform]] = None,
) -> AdvanceResult:
    """Schedule the round after ``current`` and apply any wildcard.

    Args:
        current: The most recent round
        history: Previous rounds oldest first
        policy: Advance policy, defaults to ``AdvancePolicy()``
        transforms: Wildcard transforms by intensity, defaults to
            ``DEFAULT_WILDCARD_TRANSFORMS``

    Returns:
        AdvanceResult with the next round

    Raises:
        InvalidConfigurationException: If an active wildcard's intensity has
            no registered transform
    """
    if policy is None:
        policy = AdvancePolicy()
    if transforms is None:
        transforms = DEFAULT_WILDCARD_TRANSFORMS

    base = next_round(current, policy.engine_options(), history)
    if not policy.wildcard_active:
        logger.info(f"Advanced to round {base.round_num}")
        return AdvanceResult(next=base, wildcard_applied=False)

    intensity = policy.wildcard.intensity
    transform = transforms.get(intensity)
    if transform is None:
        raise InvalidConfigurationException(
            f"No wildcard transform registered for intensity {intensity!r}"
        )

    result = transform(base)
    swaps = count_partner_swaps(base, result)
    logger.info(
        f"Advanced to round {result.round_num} with {intensity} wildcard, "
        f"{swaps} partnership(s) changed"
    )
    return AdvanceResult(next=result, wildcard_applied=True, partner_swaps=swaps)
