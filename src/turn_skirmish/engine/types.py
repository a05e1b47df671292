"""Type definitions for the combat engine."""

import itertools
from dataclasses import dataclass, field
from enum import Enum

_combatant_ids = itertools.count(1_000_000)


class Team(str, Enum):
    """Side a combatant fights for."""

    PLAYERS = "Players"
    ENEMIES = "Enemies"

    @property
    def opponent(self) -> "Team":
        """The opposing team."""
        return Team.ENEMIES if self is Team.PLAYERS else Team.PLAYERS


class Outcome(str, Enum):
    """Lifecycle state of a combat."""

    IN_PROGRESS = "in_progress"
    PLAYERS_WIN = "players_win"
    ENEMIES_WIN = "enemies_win"

    @property
    def is_terminal(self) -> bool:
        """Whether the combat is over."""
        return self is not Outcome.IN_PROGRESS

    @property
    def winner(self) -> Team | None:
        """The winning team, or None while the combat is in progress."""
        if self is Outcome.PLAYERS_WIN:
            return Team.PLAYERS
        if self is Outcome.ENEMIES_WIN:
            return Team.ENEMIES
        return None


@dataclass(eq=False)
class Combatant:
    """A single fighter in a roster.

    `current_hp` is the only field that changes during combat, and it always
    stays within [0, max_hp]. Equality is identity. `combatant_id` is unique per
    instance until an engine renumbers its roster by position.
    """

    name: str
    max_hp: int
    min_damage: int
    max_damage: int
    team: Team
    current_hp: int | None = None
    combatant_id: int = field(default_factory=lambda: next(_combatant_ids))

    def __post_init__(self) -> None:
        if self.current_hp is None:
            self.current_hp = self.max_hp

    def is_alive(self) -> bool:
        """Check if the combatant is still alive."""
        return self.current_hp > 0

    def apply_damage(self, amount: int) -> int:
        """Apply damage, clamping HP into [0, max_hp]. Returns actual HP removed."""
        before = self.current_hp
        self.current_hp = min(max(before - max(0, amount), 0), self.max_hp)
        return before - self.current_hp


@dataclass(frozen=True)
class DamageRoll:
    """Outcome of one damage roll."""

    base_damage: int
    critical: bool
    total: int


@dataclass(frozen=True)
class TurnEvent:
    """One resolved attack, as sent to status reporters."""

    round_number: int
    attacker_name: str
    target_name: str
    damage: int
    critical: bool = False


@dataclass(frozen=True)
class CombatantSnapshot:
    """A combatant's displayable state at a point in time."""

    name: str
    team: Team
    current_hp: int
    max_hp: int

    @classmethod
    def of(cls, combatant: Combatant) -> "CombatantSnapshot":
        return cls(
            name=combatant.name,
            team=combatant.team,
            current_hp=combatant.current_hp,
            max_hp=combatant.max_hp,
        )


@dataclass
class CombatResult:
    """Result of running a combat to completion."""

    outcome: Outcome
    rounds: int
    turns: int
    final_snapshot: list[CombatantSnapshot] = field(default_factory=list)

    @property
    def winner(self) -> Team | None:
        return self.outcome.winner
