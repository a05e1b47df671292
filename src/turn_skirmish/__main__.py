"""Entry point for running a turn-skirmish combat."""

import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from turn_skirmish.config import Settings, get_settings
from turn_skirmish.engine import CombatEngine, CombatLogger, ConsoleStatusReporter, Outcome, simulate
from turn_skirmish.errors import RosterError
from turn_skirmish.roster import RosterSpec, default_roster, load_roster

logger = logging.getLogger("turn_skirmish")

EXIT_ROSTER_ERROR = 2


def _load_roster(settings: Settings) -> RosterSpec:
    if settings.roster_file:
        logger.info("Loading roster from %s", settings.roster_file)
        return load_roster(settings.roster_file)
    return default_roster()


def run(settings: Settings, stream: TextIO | None = None) -> int:
    """Run one narrated combat, or a batch simulation, as configured.

    Returns:
        Process exit code
    """
    out = stream if stream is not None else sys.stdout

    try:
        roster = _load_roster(settings)
    except RosterError as e:
        logger.error("Cannot start combat: %s", e)
        return EXIT_ROSTER_ERROR

    if settings.simulation_runs > 0:
        summary = simulate(
            roster,
            settings.simulation_runs,
            seed=settings.combat_seed,
            critical_die_sides=settings.critical_die_sides,
        )
        out.write(
            f"{summary.runs} combats: Players won {summary.players_wins} "
            f"({summary.win_rate(Outcome.PLAYERS_WIN):.1%}), Enemies won {summary.enemies_wins} "
            f"({summary.win_rate(Outcome.ENEMIES_WIN):.1%}), "
            f"average {summary.average_rounds:.2f} rounds\n"
        )
        return 0

    reporter = ConsoleStatusReporter(out)
    combat_logger = CombatLogger(combat_id=1) if settings.combat_log_file else None
    engine = CombatEngine(
        roster.build_combatants(),
        seed=settings.combat_seed,
        reporter=reporter,
        logger=combat_logger,
        critical_die_sides=settings.critical_die_sides,
    )
    result = engine.run_combat()
    reporter.report_outcome(result)

    if combat_logger and settings.combat_log_file:
        path = Path(settings.combat_log_file)
        path.write_text(json.dumps(combat_logger.get_log().to_dict(), indent=2), encoding="utf-8")
        logger.info("Combat log written to %s", path)

    return 0


def main() -> None:
    """Start a combat."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        code = run(settings)
    except KeyboardInterrupt:
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
