"""Target selection - who an attacker may hit, and which one it does."""

import random
from collections.abc import Sequence

from .types import Combatant


class TargetSelector:
    """Picks a random living enemy for an attacker."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def eligible_targets(self, roster: Sequence[Combatant], attacker: Combatant) -> list[Combatant]:
        """List every living combatant on the opposing team, in roster order.

        The attacker is excluded by `combatant_id`, so two combatants with
        identical stats are still distinct.
        """
        return [
            combatant
            for combatant in roster
            if combatant.combatant_id != attacker.combatant_id
            and combatant.team == attacker.team.opponent
            and combatant.is_alive()
        ]

    def choose_target(self, targets: Sequence[Combatant]) -> Combatant | None:
        """Pick one target uniformly at random. Returns None if there are none."""
        if not targets:
            return None
        return targets[self.rng.randint(0, len(targets) - 1)]
