"""Event schedule checker.

Validates a whole event history against structural criteria (S1-S3), which
a schedule must never break, and quality criteria (Q1-Q3), which the
scheduler should keep to a minimum.
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from courtpairing.constants import (
    AMERICANO_MAX_REST_SLOTS,
    DEFAULT_ANTI_REPEAT_WINDOW,
    PLAYERS_PER_COURT,
)
from courtpairing.exceptions import ScheduleValidationException
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a schedule criterion."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of schedule criterion violations."""

    ABSOLUTE = "ABSOLUTE"  # S1-S3: Must not violate
    QUALITY = "QUALITY"  # Q1-Q3: Should minimize


@dataclass
class CriterionResult:
    """Result of checking a single criterion over an event."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        return self.criterion.split(":")[0].strip()

    @property
    def message(self) -> str:
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for an event schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    @property
    def is_valid(self) -> bool:
        return self.overall_status != CriterionStatus.VIOLATION

    def raise_for_violations(self) -> None:
        """Raise ScheduleValidationException on any absolute violation."""
        if self.violations:
            raise ScheduleValidationException(self.summary)

    def to_dict(self) -> Dict[str, object]:
        return {
            "compliance_percentage": self.compliance_percentage,
            "summary": self.summary,
            "violations": [
                {
                    "criterion": r.criterion_id,
                    "status": r.status.value,
                    "type": r.violation_type.value if r.violation_type else None,
                    "message": r.message,
                    "details": r.details,
                }
                for r in self.violations + self.quality_warnings
            ],
        }


def _result(
    criterion: str,
    violation_type: ViolationType,
    problems: List[Dict[str, object]],
    ok_message: str,
    bad_message: str,
) -> CriterionResult:
    if problems:
        return CriterionResult(
            criterion=criterion,
            status=CriterionStatus.VIOLATION,
            violation_type=violation_type,
            description=f"{bad_message}: {len(problems)}",
            details={"occurrences": problems},
        )
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=ok_message,
    )


class ScheduleChecker:
    """Checks an event history against structural and quality criteria."""

    def __init__(self, anti_repeat_window: int = DEFAULT_ANTI_REPEAT_WINDOW):
        self.anti_repeat_window = anti_repeat_window

    def check_s1_no_double_booking(self, rounds: Sequence[RoundState]) -> CriterionResult:
        """S1: A player appears at most once per round."""
        problems = []
        for round_state in rounds:
            seen = set()
            for pid in round_state.players:
                if pid in seen:
                    problems.append({"round": round_state.round_num, "player": pid})
                seen.add(pid)
        return _result(
            "S1",
            ViolationType.ABSOLUTE,
            problems,
            "No player booked twice in a round",
            "Players booked twice",
        )

    def check_s2_contiguous_courts(self, rounds: Sequence[RoundState]) -> CriterionResult:
        """S2: Court numbers run from 1 to the court count."""
        problems = []
        for round_state in rounds:
            nums = [court.court_num for court in round_state.courts]
            if nums != list(range(1, len(nums) + 1)):
                problems.append({"round": round_state.round_num, "courts": nums})
        return _result(
            "S2",
            ViolationType.ABSOLUTE,
            problems,
            "Court numbers contiguous in every round",
            "Rounds with gaps in court numbers",
        )

    def check_s3_roster_placed(
        self, rounds: Sequence[RoundState], roster: Optional[Sequence[PlayerId]]
    ) -> CriterionResult:
        """S3: Every rostered player plays except at most one resting player."""
        if not roster:
            return CriterionResult(
                criterion="S3",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No roster given",
            )
        roster_set = set(roster)
        problems = []
        for round_state in rounds:
            surplus = len(roster_set) - round_state.num_courts * PLAYERS_PER_COURT
            playing = set(round_state.players)
            missing = roster_set - playing
            unknown = playing - roster_set
            resting = min(max(surplus, 0), AMERICANO_MAX_REST_SLOTS)
            if unknown or len(missing) != resting:
                problems.append(
                    {
                        "round": round_state.round_num,
                        "missing": sorted(missing),
                        "unknown": sorted(unknown),
                    }
                )
        return _result(
            "S3",
            ViolationType.ABSOLUTE,
            problems,
            "Roster fully placed in every round",
            "Rounds with misplaced players",
        )

    def _window_repeats(self, rounds: Sequence[RoundState], groups) -> List[Dict[str, object]]:
        window = self.anti_repeat_window
        if window <= 0:
            return []
        last_seen: Dict[frozenset, int] = {}
        problems = []
        for round_state in rounds:
            rnum = round_state.round_num
            for key in groups(round_state):
                previous = last_seen.get(key)
                if previous is not None and previous >= rnum - window:
                    problems.append(
                        {"round": rnum, "players": sorted(key), "last_round": previous}
                    )
            for key in groups(round_state):
                last_seen[key] = rnum
        return problems

    def check_q1_partner_repeats(self, rounds: Sequence[RoundState]) -> CriterionResult:
        """Q1: No partnership repeats within the anti-repeat window."""
        problems = self._window_repeats(
            rounds,
            lambda rs: [
                frozenset(team) for c in rs.courts for team in (c.team_a, c.team_b)
            ],
        )
        return _result(
            "Q1",
            ViolationType.QUALITY,
            problems,
            "No partner repeats within window",
            "Partner repeats within window",
        )

    def check_q2_group_repeats(self, rounds: Sequence[RoundState]) -> CriterionResult:
        """Q2: No four-player court grouping repeats within the window."""
        problems = self._window_repeats(
            rounds, lambda rs: [frozenset(c.players) for c in rs.courts]
        )
        return _result(
            "Q2",
            ViolationType.QUALITY,
            problems,
            "No court grouping repeats within window",
            "Court grouping repeats within window",
        )

    def check_q3_consecutive_rests(
        self, rounds: Sequence[RoundState], roster: Optional[Sequence[PlayerId]]
    ) -> CriterionResult:
        """Q3: Nobody rests two rounds in a row."""
        if not roster:
            return CriterionResult(
                criterion="Q3",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No roster given",
            )
        problems = []
        previous_rest = set()
        for round_state in rounds:
            resting = set(roster) - set(round_state.players)
            for pid in sorted(resting & previous_rest):
                problems.append({"round": round_state.round_num, "player": pid})
            previous_rest = resting
        return _result(
            "Q3",
            ViolationType.QUALITY,
            problems,
            "No consecutive rests",
            "Consecutive rests",
        )

    def check(
        self,
        rounds: Sequence[RoundState],
        roster: Optional[Sequence[PlayerId]] = None,
    ) -> ValidationReport:
        """Check an event history (oldest first) against every criterion."""
        rounds = sorted(rounds, key=lambda rs: rs.round_num)
        all_results = [
            self.check_s1_no_double_booking(rounds),
            self.check_s2_contiguous_courts(rounds),
            self.check_s3_roster_placed(rounds, roster),
            self.check_q1_partner_repeats(rounds),
            self.check_q2_group_repeats(rounds),
            self.check_q3_consecutive_rests(rounds, roster),
        ]

        compliant_count = sum(
            1 for r in all_results if r.status == CriterionStatus.COMPLIANT
        )
        absolute_violations = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.ABSOLUTE
        ]
        quality_warnings = [
            r
            for r in all_results
            if r.status == CriterionStatus.VIOLATION
            and r.violation_type == ViolationType.QUALITY
        ]
        overall_status = (
            CriterionStatus.VIOLATION
            if absolute_violations
            else CriterionStatus.COMPLIANT
        )

        if absolute_violations:
            failed = " ".join(r.criterion_id for r in absolute_violations)
            summary = (
                f"Absolute violations detected - {len(absolute_violations)} "
                f"criteria failed ({failed}); {len(quality_warnings)} quality warnings"
            )
        elif quality_warnings:
            flagged = " ".join(r.criterion_id for r in quality_warnings)
            summary = f"Structure valid; quality criteria flagged ({flagged})"
        else:
            summary = "Schedule fully compliant"

        logger.info("Schedule check over %s round(s): %s", len(rounds), summary)
        return ValidationReport(
            total_criteria=len(all_results),
            compliant_count=compliant_count,
            violations=absolute_violations,
            quality_warnings=quality_warnings,
            overall_status=overall_status,
            summary=summary,
            criteria_results=all_results,
        )
