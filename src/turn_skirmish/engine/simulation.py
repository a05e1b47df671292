"""Batch simulation - run many independent combats and aggregate the results."""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .combat import CombatEngine
from .damage import DEFAULT_CRITICAL_DIE_SIDES
from .types import Outcome

if TYPE_CHECKING:
    from ..roster import RosterSpec

logger = logging.getLogger(__name__)


@dataclass
class SimulationSummary:
    """Aggregated results of a batch of combats."""

    runs: int = 0
    outcomes: Counter = field(default_factory=Counter)
    total_rounds: int = 0
    total_turns: int = 0
    longest_combat: int = 0

    @property
    def players_wins(self) -> int:
        return self.outcomes[Outcome.PLAYERS_WIN]

    @property
    def enemies_wins(self) -> int:
        return self.outcomes[Outcome.ENEMIES_WIN]

    @property
    def average_rounds(self) -> float:
        return self.total_rounds / self.runs if self.runs else 0.0

    def win_rate(self, outcome: Outcome) -> float:
        """Fraction of runs that ended with `outcome`."""
        return self.outcomes[outcome] / self.runs if self.runs else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "runs": self.runs,
            "players_wins": self.players_wins,
            "enemies_wins": self.enemies_wins,
            "players_win_rate": self.win_rate(Outcome.PLAYERS_WIN),
            "enemies_win_rate": self.win_rate(Outcome.ENEMIES_WIN),
            "average_rounds": self.average_rounds,
            "longest_combat": self.longest_combat,
            "total_turns": self.total_turns,
        }


def simulate(
    roster: "RosterSpec",
    runs: int,
    seed: int | None = None,
    critical_die_sides: int = DEFAULT_CRITICAL_DIE_SIDES,
) -> SimulationSummary:
    """Run `runs` independent combats on fresh copies of a roster.

    Each combat gets its own generator, seeded from a master generator, so
    the whole batch is reproducible from `seed`.

    Args:
        roster: Validated roster spec; combatants are rebuilt for every run
        runs: Number of combats to play
        seed: Master seed for the batch
        critical_die_sides: Faces on the critical die

    Returns:
        SimulationSummary with win counts and round statistics
    """
    if runs <= 0:
        raise ValueError(f"runs must be positive, got {runs}")

    master = random.Random(seed)
    summary = SimulationSummary()

    for _ in range(runs):
        engine = CombatEngine(
            roster.build_combatants(),
            seed=master.getrandbits(64),
            critical_die_sides=critical_die_sides,
        )
        result = engine.run_combat()

        summary.runs += 1
        summary.outcomes[result.outcome] += 1
        summary.total_rounds += result.rounds
        summary.total_turns += result.turns
        summary.longest_combat = max(summary.longest_combat, result.rounds)

    logger.info(
        "Simulated %d combats: players %d, enemies %d, average %.2f rounds",
        summary.runs,
        summary.players_wins,
        summary.enemies_wins,
        summary.average_rounds,
    )
    return summary
