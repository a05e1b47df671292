"""Status reporters - sinks for turn events and round snapshots."""

import sys
from typing import Protocol, TextIO

from .types import CombatantSnapshot, CombatResult, TurnEvent


class StatusReporter(Protocol):
    """Anything that can receive turn events and round snapshots from the engine."""

    def report_turn(self, event: TurnEvent) -> None: ...

    def report_snapshot(self, round_number: int, snapshot: list[CombatantSnapshot]) -> None: ...


class NullStatusReporter:
    """Reporter that discards everything."""

    def report_turn(self, event: TurnEvent) -> None:
        pass

    def report_snapshot(self, round_number: int, snapshot: list[CombatantSnapshot]) -> None:
        pass


class ConsoleStatusReporter:
    """Renders combat progress as plain text lines.

    Usage:
        reporter = ConsoleStatusReporter()
        result = CombatEngine(combatants, reporter=reporter).run_combat()
        reporter.report_outcome(result)
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def report_turn(self, event: TurnEvent) -> None:
        """Write one attack line."""
        self._write(self.format_turn(event))

    def report_snapshot(self, round_number: int, snapshot: list[CombatantSnapshot]) -> None:
        """Write one status line per combatant, followed by a blank line."""
        for entry in snapshot:
            self._write(self.format_snapshot_line(entry))
        self._write("")

    def report_outcome(self, result: CombatResult) -> None:
        """Announce the winning team."""
        self._write(self.format_outcome(result))

    @staticmethod
    def format_turn(event: TurnEvent) -> str:
        line = f"{event.attacker_name} attacks {event.target_name} for {event.damage} damage!"
        if event.critical:
            line += " Critical hit!"
        return line

    @staticmethod
    def format_snapshot_line(entry: CombatantSnapshot) -> str:
        return f"{entry.name} in {entry.team.value} - {entry.current_hp}/{entry.max_hp}"

    @staticmethod
    def format_outcome(result: CombatResult) -> str:
        winner = result.winner
        if winner is None:
            return f"Combat still in progress after {result.rounds} rounds."
        noun = "round" if result.rounds == 1 else "rounds"
        return f"{winner.value} win after {result.rounds} {noun}!"

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")
