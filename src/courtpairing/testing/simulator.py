"""Random Event Simulator.

Drives the round engine through a whole simulated event: creates a roster
with ratings, seeds round 1, plays every court with a rating-weighted
random score, and advances round by round while tracking Elo ratings and
leaderboard points. Used by the ``court-test`` CLI and the test-suite.
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

import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from courtpairing.constants import (
    DEFAULT_ANTI_REPEAT_WINDOW,
    DEFAULT_FORMAT,
    FORMAT_WINNERS_COURT,
    PLAYERS_PER_COURT,
    WILDCARD_LIGHT,
)
from courtpairing.controllers.tournament.advance import advance_round
from courtpairing.models.rating.elo_config import EloConfig
from courtpairing.models.tournament.court_match import CourtMatch
from courtpairing.models.tournament.engine_options import AdvancePolicy, WildcardPolicy
from courtpairing.models.tournament.round_state import RoundState
from courtpairing.pairing.scheduler import initial_round
from courtpairing.pairing.wildcard import is_wildcard_round, seeded_shuffle
from courtpairing.rating.elo import (
    apply_rating_delta,
    court_role_for,
    expected_score,
    rating_deltas_for_court,
    team_rating,
)
from courtpairing.scoring.points import round_points
from courtpairing.tournament.standings import compute_standings
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger
from courtpairing.validation.schedule_checker import ScheduleChecker

logger = setup_logger(__name__)


class RatingDistribution(Enum):
    """Rating distribution patterns for simulated rosters."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"


class ResultPattern(Enum):
    """Result generation patterns for simulated courts."""

    REALISTIC = "realistic"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class SimulatorConfig:
    """Configuration for the Random Event Simulator."""

    num_players: int
    num_courts: int
    num_rounds: int
    format: str = DEFAULT_FORMAT
    anti_repeat_window: int = DEFAULT_ANTI_REPEAT_WINDOW
    rating_distribution: RatingDistribution = RatingDistribution.NORMAL
    rating_range: Tuple[int, int] = (700, 1500)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    points_per_match: int = 21
    seed: Optional[int] = None
    wildcard_start_round: Optional[int] = None
    wildcard_frequency: Optional[int] = None
    wildcard_intensity: str = WILDCARD_LIGHT
    wildcard_shuffle: bool = False
    validate_schedule: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numPlayers": self.num_players,
            "numCourts": self.num_courts,
            "numRounds": self.num_rounds,
            "format": self.format,
            "antiRepeatWindow": self.anti_repeat_window,
            "ratingDistribution": self.rating_distribution.value,
            "resultPattern": self.result_pattern.value,
            "pointsPerMatch": self.points_per_match,
            "seed": self.seed,
            "wildcardStartRound": self.wildcard_start_round,
            "wildcardFrequency": self.wildcard_frequency,
            "wildcardIntensity": self.wildcard_intensity,
        }


class PlayerFactory:
    """Factory for simulated rosters."""

    def __init__(self, config: SimulatorConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_players(self) -> Dict[PlayerId, float]:
        """Create player ids in seed order with their starting ratings."""
        players = {}
        for i in range(self.config.num_players):
            players[f"P{i + 1:02d}"] = float(self._generate_rating())
        logger.info(
            "Created %s players with %s distribution",
            len(players),
            self.config.rating_distribution.value,
        )
        return players

    def _generate_rating(self) -> int:
        min_rating, max_rating = self.config.rating_range
        if self.config.rating_distribution == RatingDistribution.UNIFORM:
            return self.random.randint(min_rating, max_rating)
        if self.config.rating_distribution == RatingDistribution.NORMAL:
            mean = (min_rating + max_rating) / 2
            std_dev = (max_rating - min_rating) / 6
            rating = int(self.random.gauss(mean, std_dev))
            return max(min_rating, min(max_rating, rating))
        base = self.random.choice([800, 1000, 1200, 1400])
        return self.random.randint(base - 100, base + 100)


class ResultSimulator:
    """Simulates court scores from team ratings."""

    def __init__(self, config: SimulatorConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate_court(self, court: CourtMatch, ratings: Dict[PlayerId, float]) -> CourtMatch:
        """Return ``court`` with both scores filled in.

        Every rally is won by team A with a probability derived from the
        team ratings, so totals always add up to ``points_per_match``.
        """
        total = self.config.points_per_match
        if self.config.result_pattern == ResultPattern.RANDOM:
            chance = 0.5
        else:
            chance = expected_score(
                team_rating(ratings[p] for p in court.team_a),
                team_rating(ratings[p] for p in court.team_b),
            )
            if self.config.result_pattern == ResultPattern.PREDICTABLE:
                chance = 0.5 + (chance - 0.5) * 1.5
                chance = max(0.05, min(0.95, chance))
        score_a = sum(1 for _ in range(total) if self.random.random() < chance)
        return court.with_scores(score_a, total - score_a)


class EventSimulator:
    """Main event simulator orchestrating roster creation and play."""

    def __init__(self, config: SimulatorConfig, elo_config: Optional[EloConfig] = None):
        self.config = config
        self.elo_config = elo_config or EloConfig()
        self.player_factory = PlayerFactory(config)
        self.result_simulator = ResultSimulator(config)

    def _policy(self, next_round_num: int, roster: List[PlayerId]) -> AdvancePolicy:
        wildcard = None
        if self.config.wildcard_start_round:
            wildcard = WildcardPolicy(
                active=is_wildcard_round(
                    next_round_num,
                    self.config.wildcard_start_round,
                    self.config.wildcard_frequency,
                ),
                intensity=self.config.wildcard_intensity,
            )
        return AdvancePolicy(
            anti_repeat_window=self.config.anti_repeat_window,
            wildcard=wildcard,
            format=self.config.format,
            players=tuple(roster),
        )

    def _transforms(self):
        if not self.config.wildcard_shuffle:
            return None
        seed = self.config.seed or 0
        return {
            self.config.wildcard_intensity: seeded_shuffle(
                self.config.wildcard_intensity, seed
            )
        }

    def _update_ratings(self, round_state: RoundState, ratings: Dict[PlayerId, float]) -> None:
        deltas: Dict[PlayerId, float] = {}
        for court in round_state.courts:
            role = court_role_for(self.config.format, court.court_num)
            deltas.update(rating_deltas_for_court(court, ratings, self.elo_config, role))
        for pid, delta in deltas.items():
            ratings[pid] = apply_rating_delta(ratings[pid], delta, self.elo_config)

    def generate_event(self) -> Dict[str, Any]:
        """Simulate a complete event.

        Returns:
            Dict with the config, starting and final ratings, played rounds,
            per-round points, standings and, when enabled, the schedule report
        """
        logger.info(
            "Simulating %s event: %s players, %s courts, %s rounds",
            self.config.format,
            self.config.num_players,
            self.config.num_courts,
            self.config.num_rounds,
        )
        starting = self.player_factory.create_players()
        ratings = dict(starting)
        roster = list(starting)

        rounds: List[RoundState] = []
        points: Dict[int, Dict[PlayerId, int]] = {}
        wildcard_rounds: List[int] = []

        current = initial_round(roster, self.config.num_courts, self.config.format)
        for round_num in range(1, self.config.num_rounds + 1):
            if round_num > 1:
                result = advance_round(
                    current,
                    rounds,
                    self._policy(round_num, roster),
                    self._transforms(),
                )
                if result.wildcard_applied:
                    wildcard_rounds.append(round_num)
                current = result.next

            played = RoundState(
                round_num=current.round_num,
                courts=tuple(
                    self.result_simulator.simulate_court(court, ratings)
                    for court in current.courts
                ),
            )
            points[round_num] = round_points(played, self.config.format)
            self._update_ratings(played, ratings)
            rounds.append(played)
            current = played

        event = {
            "config": self.config,
            "players": starting,
            "ratings": ratings,
            "rounds": rounds,
            "points": points,
            "wildcard_rounds": wildcard_rounds,
            "standings": compute_standings(rounds, points, ratings),
        }

        if self.config.validate_schedule:
            event["schedule_report"] = ScheduleChecker(self.config.anti_repeat_window).check(
                rounds, roster
            )

        logger.info("Event simulation complete")
        return event

    def export_json_format(self, event: Dict[str, Any]) -> str:
        """Serialize a simulated event to JSON."""
        data = {
            "config": self.config.to_dict(),
            "players": [
                {"id": pid, "rating": rating} for pid, rating in event["players"].items()
            ],
            "rounds": [round_state.to_dict() for round_state in event["rounds"]],
            "points": {str(rnum): pts for rnum, pts in event["points"].items()},
            "ratings": event["ratings"],
            "standings": [s.to_dict() for s in event["standings"]],
        }
        if "schedule_report" in event:
            data["schedule_report"] = event["schedule_report"].to_dict()
        return json.dumps(data, indent=2)


def load_event_json(text: str) -> Tuple[List[RoundState], List[PlayerId], Dict[str, Any]]:
    """Read rounds, roster and config back from ``export_json_format`` output."""
    data = json.loads(text)
    rounds = [RoundState.from_dict(r) for r in data.get("rounds", [])]
    roster = [p["id"] for p in data.get("players", [])]
    return rounds, roster, data.get("config", {})


def courts_for_players(num_players: int) -> int:
    """Court count a roster of ``num_players`` fills, any extra player resting."""
    return num_players // PLAYERS_PER_COURT


def create_small_event(
    format: str = DEFAULT_FORMAT, seed: Optional[int] = None
) -> EventSimulator:
    """Create a two-court event for quick testing."""
    num_players = 9 if format != FORMAT_WINNERS_COURT else 8
    config = SimulatorConfig(
        num_players=num_players,
        num_courts=2,
        num_rounds=9,
        format=format,
        seed=seed,
    )
    return EventSimulator(config)


def create_club_night(
    format: str = DEFAULT_FORMAT, seed: Optional[int] = None
) -> EventSimulator:
    """Create a four-court club night."""
    config = SimulatorConfig(
        num_players=16,
        num_courts=4,
        num_rounds=8,
        format=format,
        rating_distribution=RatingDistribution.CLUB,
        seed=seed,
    )
    return EventSimulator(config)
