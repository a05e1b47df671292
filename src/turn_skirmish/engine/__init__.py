"""Combat engine module - handles turn order, targeting, damage, and team elimination."""

from .combat import CombatEngine, validate_combatants
from .damage import DamageResolver
from .logging import CombatLog, CombatLogger, LogEntry, LogEventType, StateSnapshot
from .reporting import ConsoleStatusReporter, NullStatusReporter, StatusReporter
from .simulation import SimulationSummary, simulate
from .targeting import TargetSelector
from .types import Combatant, CombatantSnapshot, CombatResult, DamageRoll, Outcome, Team, TurnEvent

__all__ = [
    "Combatant",
    "CombatantSnapshot",
    "CombatResult",
    "DamageRoll",
    "Outcome",
    "Team",
    "TurnEvent",
    "DamageResolver",
    "TargetSelector",
    "CombatEngine",
    "validate_combatants",
    "StatusReporter",
    "ConsoleStatusReporter",
    "NullStatusReporter",
    "CombatLogger",
    "CombatLog",
    "LogEntry",
    "LogEventType",
    "StateSnapshot",
    "SimulationSummary",
    "simulate",
]
