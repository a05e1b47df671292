"""Shared fixtures for combat tests."""

import random
from collections.abc import Iterable

import pytest

from turn_skirmish.engine.types import Combatant, CombatantSnapshot, Team, TurnEvent
from turn_skirmish.roster import RosterSpec, default_roster


class ScriptedRandom(random.Random):
    """Random generator whose randint results are scripted.

    Queued values are returned in order (and must fall inside the requested
    range). Once the queue is empty, randint returns the low end of the range:
    minimum damage, no critical hit, first eligible target.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        super().__init__(0)
        self.queue = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self.queue:
            return a
        value = self.queue.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


class RecordingReporter:
    """Status reporter that keeps everything it receives."""

    def __init__(self) -> None:
        self.turns: list[TurnEvent] = []
        self.snapshots: list[tuple[int, list[CombatantSnapshot]]] = []

    def report_turn(self, event: TurnEvent) -> None:
        self.turns.append(event)

    def report_snapshot(self, round_number: int, snapshot: list[CombatantSnapshot]) -> None:
        self.snapshots.append((round_number, snapshot))


def make_combatant(
    name: str,
    team: Team,
    max_hp: int = 100,
    min_damage: int = 8,
    max_damage: int = 15,
    current_hp: int | None = None,
) -> Combatant:
    return Combatant(
        name=name,
        max_hp=max_hp,
        min_damage=min_damage,
        max_damage=max_damage,
        team=team,
        current_hp=current_hp,
    )


@pytest.fixture
def scripted_rng() -> ScriptedRandom:
    """Scripted generator with an empty queue."""
    return ScriptedRandom()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Recording status reporter."""
    return RecordingReporter()


@pytest.fixture
def canonical_roster() -> RosterSpec:
    """Four players and four enemies, alternating."""
    return default_roster()


@pytest.fixture
def canonical_combatants(canonical_roster: RosterSpec) -> list[Combatant]:
    """Fresh combatants built from the canonical roster."""
    return canonical_roster.build_combatants()


@pytest.fixture
def duel() -> tuple[Combatant, Combatant]:
    """A fixed-damage player against a 25 HP enemy that hits for nothing."""
    hero = make_combatant("Hero", Team.PLAYERS, max_hp=100, min_damage=10, max_damage=10)
    dummy = make_combatant("Dummy", Team.ENEMIES, max_hp=25, min_damage=0, max_damage=0)
    return hero, dummy
