"""Combat logging system for tracking and verifying engine output.

Provides structured logging of all combat events including:
- Round boundaries
- Resolved attacks with the target's before/after state
- Turns skipped for lack of targets
- Per-round state snapshots and the final outcome
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .types import Combatant, Outcome, Team


class LogEventType(str, Enum):
    """Types of log events."""

    # Combat lifecycle
    COMBAT_START = "combat_start"
    COMBAT_END = "combat_end"

    # Round lifecycle
    ROUND_START = "round_start"
    ROUND_END = "round_end"

    # Turns
    ATTACK_RESOLVED = "attack_resolved"
    TURN_SKIPPED = "turn_skipped"  # No eligible target


@dataclass
class StateSnapshot:
    """Snapshot of a combatant's state at a point in time."""

    combatant_id: int
    name: str
    team: Team
    current_hp: int
    max_hp: int

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "combatant_id": self.combatant_id,
            "name": self.name,
            "team": self.team.value,
            "current_hp": self.current_hp,
            "max_hp": self.max_hp,
        }


@dataclass
class LogEntry:
    """A single log entry representing a combat event."""

    event_type: LogEventType
    round_number: int
    timestamp_order: int = 0  # Order within the combat for deterministic sorting

    # Event-specific data
    attacker_id: int | None = None
    target_id: int | None = None
    damage: int | None = None
    critical: bool | None = None
    reason: str | None = None

    # Target state around an attack
    state_before: StateSnapshot | None = None
    state_after: StateSnapshot | None = None

    # For snapshots - all combatants, in roster order
    all_states: list[StateSnapshot] | None = None

    # Final outcome
    outcome: Outcome | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "round_number": self.round_number,
            "timestamp_order": self.timestamp_order,
        }

        if self.attacker_id is not None:
            result["attacker_id"] = self.attacker_id
        if self.target_id is not None:
            result["target_id"] = self.target_id
        if self.damage is not None:
            result["damage"] = self.damage
        if self.critical is not None:
            result["critical"] = self.critical
        if self.reason is not None:
            result["reason"] = self.reason
        if self.state_before is not None:
            result["state_before"] = self.state_before.to_dict()
        if self.state_after is not None:
            result["state_after"] = self.state_after.to_dict()
        if self.all_states is not None:
            result["all_states"] = [state.to_dict() for state in self.all_states]
        if self.outcome is not None:
            result["outcome"] = self.outcome.value

        return result


@dataclass
class CombatLog:
    """Complete log of one combat."""

    combat_id: int
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "combat_id": self.combat_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_round(self, round_number: int) -> list[LogEntry]:
        """Get all entries for a specific round."""
        return [e for e in self.entries if e.round_number == round_number]

    def format_readable(self) -> str:
        """Format the log in a human-readable format."""
        lines: list[str] = []
        lines.append(f"=== Combat Log (Combat #{self.combat_id}) ===")

        names: dict[int, str] = {}
        for entry in self.entries:
            for state in entry.all_states or []:
                names[state.combatant_id] = state.name

        for entry in self.entries:
            lines.append(self._format_entry(entry, names))

        return "\n".join(lines)

    def _format_entry(self, entry: LogEntry, names: dict[int, str]) -> str:
        """Format a single log entry."""

        def name_of(combatant_id: int | None) -> str:
            if combatant_id is None:
                return "?"
            return names.get(combatant_id, f"#{combatant_id}")

        match entry.event_type:
            case LogEventType.COMBAT_START:
                return f"Combat begins with {len(entry.all_states or [])} combatants"

            case LogEventType.ROUND_START:
                return f"\n--- Round {entry.round_number} ---"

            case LogEventType.ATTACK_RESOLVED:
                crit = " (critical)" if entry.critical else ""
                hp_change = ""
                if entry.state_before and entry.state_after:
                    hp_change = f" [HP: {entry.state_before.current_hp} → {entry.state_after.current_hp}]"
                return (
                    f"  {name_of(entry.attacker_id)} → {name_of(entry.target_id)}: "
                    f"{entry.damage} damage{crit}{hp_change}"
                )

            case LogEventType.TURN_SKIPPED:
                return f"  {name_of(entry.attacker_id)} skips ({entry.reason})"

            case LogEventType.ROUND_END:
                state_lines = [
                    f"    {state.name} [{state.team.value}]: HP={state.current_hp}/{state.max_hp}"
                    for state in entry.all_states or []
                ]
                return "  State snapshot:\n" + "\n".join(state_lines)

            case LogEventType.COMBAT_END:
                outcome = entry.outcome.value if entry.outcome else "?"
                return f"*** RESULT: {outcome} after {entry.round_number} rounds ***"

            case _:
                return f"  {entry.event_type.value}: {entry.reason or ''}"


class CombatLogger:
    """Logger for tracking combat events.

    Usage:
        logger = CombatLogger(combat_id=1)
        engine = CombatEngine(combatants, logger=logger)
        engine.run_combat()

        # Get the complete log
        log = logger.get_log()
        print(log.format_readable())
    """

    def __init__(self, combat_id: int = 0) -> None:
        """Initialize the logger for a combat."""
        self.combat_id = combat_id
        self._log = CombatLog(combat_id=combat_id)
        self._order_counter = 0

    def _next_order(self) -> int:
        """Get the next timestamp order value."""
        self._order_counter += 1
        return self._order_counter

    def _append(self, entry: LogEntry) -> None:
        entry.timestamp_order = self._next_order()
        self._log.entries.append(entry)

    def get_log(self) -> CombatLog:
        """Get the complete combat log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    @staticmethod
    def snapshot_state(combatant: Combatant) -> StateSnapshot:
        """Create a snapshot from a Combatant."""
        return StateSnapshot(
            combatant_id=combatant.combatant_id,
            name=combatant.name,
            team=combatant.team,
            current_hp=combatant.current_hp,
            max_hp=combatant.max_hp,
        )

    def snapshot_all(self, combatants: Iterable[Combatant]) -> list[StateSnapshot]:
        return [self.snapshot_state(c) for c in combatants]

    def log_combat_start(self, combatants: Iterable[Combatant]) -> None:
        """Log the start of a combat with the initial roster."""
        self._append(
            LogEntry(
                event_type=LogEventType.COMBAT_START,
                round_number=0,
                all_states=self.snapshot_all(combatants),
            )
        )

    def log_round_start(self, round_number: int) -> None:
        """Log the start of a round."""
        self._append(LogEntry(event_type=LogEventType.ROUND_START, round_number=round_number))

    def log_attack(
        self,
        round_number: int,
        attacker: Combatant,
        damage: int,
        critical: bool,
        state_before: StateSnapshot,
        target: Combatant,
    ) -> None:
        """Log a resolved attack with the target's before/after state."""
        self._append(
            LogEntry(
                event_type=LogEventType.ATTACK_RESOLVED,
                round_number=round_number,
                attacker_id=attacker.combatant_id,
                target_id=target.combatant_id,
                damage=damage,
                critical=critical,
                state_before=state_before,
                state_after=self.snapshot_state(target),
            )
        )

    def log_turn_skipped(self, round_number: int, attacker: Combatant, reason: str) -> None:
        """Log a turn that had nothing to do."""
        self._append(
            LogEntry(
                event_type=LogEventType.TURN_SKIPPED,
                round_number=round_number,
                attacker_id=attacker.combatant_id,
                reason=reason,
            )
        )

    def log_round_end(self, round_number: int, combatants: Iterable[Combatant]) -> None:
        """Log the end of a round with a snapshot of every combatant."""
        self._append(
            LogEntry(
                event_type=LogEventType.ROUND_END,
                round_number=round_number,
                all_states=self.snapshot_all(combatants),
            )
        )

    def log_combat_end(self, round_number: int, outcome: Outcome) -> None:
        """Log the final outcome."""
        self._append(
            LogEntry(
                event_type=LogEventType.COMBAT_END,
                round_number=round_number,
                outcome=outcome,
            )
        )
