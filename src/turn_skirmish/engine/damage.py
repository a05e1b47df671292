"""Damage resolution - base damage rolls and critical hits."""

import random

from .types import Combatant, DamageRoll

DEFAULT_CRITICAL_DIE_SIDES = 20
CRITICAL_MULTIPLIER = 2


class DamageResolver:
    """Rolls damage for attacks.

    Base damage is uniform over the attacker's inclusive damage range. A
    critical hit is an independent roll of a die with `critical_die_sides`
    faces where only the highest face counts, so the default chance is 1/20.
    """

    def __init__(self, rng: random.Random, critical_die_sides: int = DEFAULT_CRITICAL_DIE_SIDES) -> None:
        if critical_die_sides < 1:
            raise ValueError(f"critical_die_sides must be at least 1, got {critical_die_sides}")
        self.rng = rng
        self.critical_die_sides = critical_die_sides

    def roll(self, attacker: Combatant) -> DamageRoll:
        """Roll damage for an attack, keeping track of whether it was critical.

        Args:
            attacker: The attacking combatant; only its damage range is read

        Returns:
            DamageRoll with the base roll, the critical flag, and the final total
        """
        base = self.rng.randint(attacker.min_damage, attacker.max_damage)
        critical = self.is_critical()
        total = base * CRITICAL_MULTIPLIER if critical else base
        return DamageRoll(base_damage=base, critical=critical, total=total)

    def resolve_damage(self, attacker: Combatant) -> int:
        """Roll damage for an attack and return the final value."""
        return self.roll(attacker).total

    def is_critical(self) -> bool:
        """Roll the critical die."""
        return self.rng.randint(1, self.critical_die_sides) == self.critical_die_sides
