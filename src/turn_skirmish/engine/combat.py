"""Combat engine - drives rounds and turns until one team is eliminated."""

import logging
import random
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..errors import RosterError
from .damage import DEFAULT_CRITICAL_DIE_SIDES, DamageResolver
from .reporting import NullStatusReporter, StatusReporter
from .targeting import TargetSelector
from .types import Combatant, CombatantSnapshot, CombatResult, Outcome, Team, TurnEvent

if TYPE_CHECKING:
    from .logging import CombatLogger

logger = logging.getLogger(__name__)


def validate_combatants(combatants: Sequence[Combatant]) -> None:
    """Reject rosters the engine cannot run.

    Raises:
        RosterError: On an empty roster, a team with no members, non-positive
            max HP, a negative or inverted damage range, HP out of bounds, or
            two standing teams where no living combatant can deal damage
    """
    if not combatants:
        raise RosterError("Roster is empty")

    for combatant in combatants:
        if combatant.max_hp <= 0:
            raise RosterError(f"Combatant {combatant.name!r} has non-positive max_hp {combatant.max_hp}")
        if combatant.min_damage < 0:
            raise RosterError(f"Combatant {combatant.name!r} has negative min_damage {combatant.min_damage}")
        if combatant.min_damage > combatant.max_damage:
            raise RosterError(
                f"Combatant {combatant.name!r} has min_damage {combatant.min_damage} "
                f"greater than max_damage {combatant.max_damage}"
            )
        if not 0 <= combatant.current_hp <= combatant.max_hp:
            raise RosterError(
                f"Combatant {combatant.name!r} has current_hp {combatant.current_hp} "
                f"outside [0, {combatant.max_hp}]"
            )

    for team in Team:
        if not any(c.team == team for c in combatants):
            raise RosterError(f"Team {team.value} has no members")

    # Only matters while both teams still stand; a decided roster ends at once
    living = [c for c in combatants if c.is_alive()]
    if {c.team for c in living} == set(Team) and not any(c.max_damage > 0 for c in living):
        raise RosterError("No combatant can deal damage")


class CombatEngine:
    """Runs a team-versus-team combat to completion.

    Each round every living combatant, in roster order, attacks one random
    living enemy. The outcome is re-checked after every turn and after every
    round; once a team is wiped out the engine stops, even mid-round. A
    snapshot of the whole roster goes to the reporter after every round,
    including a round cut short.

    The engine owns a single random generator shared by damage rolls and
    target choice. Pass `rng` or `seed` to make a combat reproducible.

    The engine takes ownership of the combatants it is given: their
    `combatant_id` is overwritten with their roster position. Build fresh
    combatants (e.g. `RosterSpec.build_combatants()`) for every engine
    instead of sharing one list between engines.
    """

    def __init__(
        self,
        combatants: Sequence[Combatant],
        rng: random.Random | None = None,
        seed: int | None = None,
        reporter: StatusReporter | None = None,
        logger: "CombatLogger | None" = None,
        critical_die_sides: int = DEFAULT_CRITICAL_DIE_SIDES,
    ) -> None:
        validate_combatants(combatants)

        self._roster: list[Combatant] = list(combatants)
        for index, combatant in enumerate(self._roster):
            combatant.combatant_id = index

        self.rng = rng if rng is not None else random.Random(seed)
        self.damage_resolver = DamageResolver(self.rng, critical_die_sides=critical_die_sides)
        self.target_selector = TargetSelector(self.rng)
        self.reporter: StatusReporter = reporter if reporter is not None else NullStatusReporter()
        self.logger = logger

        self.rounds_played = 0
        self.turns_taken = 0
        self._outcome = Outcome.IN_PROGRESS
        self._started = False
        self._update_outcome()

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def roster(self) -> tuple[Combatant, ...]:
        return tuple(self._roster)

    def is_team_alive(self, team: Team) -> bool:
        """Check whether any member of a team is still alive."""
        return any(c.team == team and c.is_alive() for c in self._roster)

    def snapshot(self) -> list[CombatantSnapshot]:
        """Current state of every combatant, in roster order."""
        return [CombatantSnapshot.of(c) for c in self._roster]

    def run_combat(self) -> CombatResult:
        """Play rounds until one team is eliminated.

        Returns:
            CombatResult with the terminal outcome and round/turn counts
        """
        self._start()

        while not self._outcome.is_terminal:
            self.play_round()

        logger.info(
            "Combat finished: %s after %d rounds (%d turns)",
            self._outcome.value,
            self.rounds_played,
            self.turns_taken,
        )
        if self.logger:
            self.logger.log_combat_end(self.rounds_played, self._outcome)

        return CombatResult(
            outcome=self._outcome,
            rounds=self.rounds_played,
            turns=self.turns_taken,
            final_snapshot=self.snapshot(),
        )

    def play_round(self) -> int:
        """Play one pass over the roster.

        Stops early if a team is eliminated. A snapshot is always reported
        afterwards. Does nothing once the combat is over.

        Returns:
            Number of turns in which an attack landed
        """
        if self._outcome.is_terminal:
            return 0

        self._start()
        self.rounds_played += 1
        round_number = self.rounds_played
        logger.debug("Round %d begins", round_number)
        if self.logger:
            self.logger.log_round_start(round_number)

        turns = 0
        for combatant in self._roster:
            # Covers combatants killed earlier in this round
            if not combatant.is_alive():
                continue

            if self.take_turn(combatant) is not None:
                turns += 1

            if self._outcome.is_terminal:
                break

        self.reporter.report_snapshot(round_number, self.snapshot())
        if self.logger:
            self.logger.log_round_end(round_number, self._roster)

        return turns

    def take_turn(self, attacker: Combatant) -> TurnEvent | None:
        """Resolve one attack by `attacker`.

        Only members of this engine's roster may attack.

        Returns:
            The reported TurnEvent, or None if the attacker is dead or has no target

        Raises:
            ValueError: If `attacker` is not in this engine's roster
        """
        if not any(c is attacker for c in self._roster):
            raise ValueError(f"Combatant {attacker.name!r} is not in this combat's roster")
        if not attacker.is_alive():
            return None

        round_number = self.rounds_played
        targets = self.target_selector.eligible_targets(self._roster, attacker)
        if not targets:
            if self.logger:
                self.logger.log_turn_skipped(round_number, attacker, reason="no eligible targets")
            return None

        roll = self.damage_resolver.roll(attacker)
        target = self.target_selector.choose_target(targets)

        state_before = self.logger.snapshot_state(target) if self.logger else None
        target.apply_damage(roll.total)
        self.turns_taken += 1

        event = TurnEvent(
            round_number=round_number,
            attacker_name=attacker.name,
            target_name=target.name,
            damage=roll.total,
            critical=roll.critical,
        )
        self.reporter.report_turn(event)
        if self.logger and state_before is not None:
            self.logger.log_attack(
                round_number,
                attacker,
                damage=roll.total,
                critical=roll.critical,
                state_before=state_before,
                target=target,
            )

        self._update_outcome()
        return event

    def _start(self) -> None:
        if self._started:
            return
        self._started = True
        if self.logger:
            self.logger.log_combat_start(self._roster)

    def _update_outcome(self) -> Outcome:
        """Re-evaluate the terminal condition. Enemies being wiped out is checked first."""
        if not self.is_team_alive(Team.ENEMIES):
            self._outcome = Outcome.PLAYERS_WIN
        elif not self.is_team_alive(Team.PLAYERS):
            self._outcome = Outcome.ENEMIES_WIN
        else:
            self._outcome = Outcome.IN_PROGRESS
        return self._outcome
