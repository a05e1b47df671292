"""Tests for the combat logging system."""

from conftest import ScriptedRandom, make_combatant

from turn_skirmish.engine.combat import CombatEngine
from turn_skirmish.engine.logging import (
    CombatLog,
    CombatLogger,
    LogEntry,
    LogEventType,
    StateSnapshot,
)
from turn_skirmish.engine.types import Outcome, Team


class TestStateSnapshot:
    """Tests for StateSnapshot data class."""

    def test_create_snapshot(self):
        """Test creating a state snapshot."""
        snapshot = StateSnapshot(combatant_id=3, name="Enemy2", team=Team.ENEMIES, current_hp=80, max_hp=120)

        assert snapshot.combatant_id == 3
        assert snapshot.current_hp == 80
        assert snapshot.max_hp == 120
        assert snapshot.is_alive

    def test_snapshot_to_dict(self):
        """Test converting snapshot to dictionary."""
        snapshot = StateSnapshot(combatant_id=0, name="Player1", team=Team.PLAYERS, current_hp=0, max_hp=100)

        result = snapshot.to_dict()

        assert result == {
            "combatant_id": 0,
            "name": "Player1",
            "team": "Players",
            "current_hp": 0,
            "max_hp": 100,
        }
        assert not snapshot.is_alive


class TestLogEntry:
    """Tests for LogEntry data class."""

    def test_minimal_entry_to_dict(self):
        """Optional fields are omitted when unset."""
        entry = LogEntry(event_type=LogEventType.ROUND_START, round_number=2, timestamp_order=5)

        assert entry.to_dict() == {
            "event_type": "round_start",
            "round_number": 2,
            "timestamp_order": 5,
        }

    def test_attack_entry_to_dict(self):
        """Attack entries carry damage and the target's before/after state."""
        before = StateSnapshot(combatant_id=1, name="Enemy1", team=Team.ENEMIES, current_hp=120, max_hp=120)
        after = StateSnapshot(combatant_id=1, name="Enemy1", team=Team.ENEMIES, current_hp=108, max_hp=120)
        entry = LogEntry(
            event_type=LogEventType.ATTACK_RESOLVED,
            round_number=1,
            attacker_id=0,
            target_id=1,
            damage=12,
            critical=False,
            state_before=before,
            state_after=after,
        )

        result = entry.to_dict()

        assert result["attacker_id"] == 0
        assert result["target_id"] == 1
        assert result["damage"] == 12
        assert result["critical"] is False
        assert result["state_before"]["current_hp"] == 120
        assert result["state_after"]["current_hp"] == 108

    def test_outcome_entry_to_dict(self):
        """Outcome is serialized by value."""
        entry = LogEntry(event_type=LogEventType.COMBAT_END, round_number=7, outcome=Outcome.ENEMIES_WIN)
        assert entry.to_dict()["outcome"] == "enemies_win"


class TestCombatLogger:
    """Tests for CombatLogger."""

    def test_order_counter_increments(self):
        """Each logged event gets the next order value."""
        logger = CombatLogger(combat_id=4)
        logger.log_round_start(1)
        logger.log_round_start(2)

        orders = [e.timestamp_order for e in logger.get_log().entries]
        assert orders == [1, 2]
        assert logger.get_log().combat_id == 4

    def test_clear(self):
        """Clearing empties the log and resets ordering."""
        logger = CombatLogger()
        logger.log_round_start(1)
        logger.clear()

        assert logger.get_log().entries == []
        logger.log_round_start(1)
        assert logger.get_log().entries[0].timestamp_order == 1

    def test_snapshot_state(self):
        """Snapshots copy combatant state."""
        combatant = make_combatant("Player1", Team.PLAYERS, current_hp=40)
        snapshot = CombatLogger.snapshot_state(combatant)
        combatant.current_hp = 10

        assert snapshot.current_hp == 40
        assert snapshot.name == "Player1"


class TestEngineLogging:
    """Tests for the log an engine produces."""

    def _run_duel(self) -> tuple[CombatEngine, CombatLog]:
        hero = make_combatant("Hero", Team.PLAYERS, min_damage=10, max_damage=10)
        dummy = make_combatant("Dummy", Team.ENEMIES, max_hp=25, min_damage=0, max_damage=0)
        logger = CombatLogger(combat_id=1)
        engine = CombatEngine([hero, dummy], rng=ScriptedRandom(), logger=logger)
        engine.run_combat()
        return engine, logger.get_log()

    def test_event_sequence(self):
        """A combat logs start, rounds, attacks, snapshots and the result."""
        _, log = self._run_duel()

        types = [e.event_type for e in log.entries]
        assert types[0] == LogEventType.COMBAT_START
        assert types[-1] == LogEventType.COMBAT_END
        assert types.count(LogEventType.ROUND_START) == 3
        assert types.count(LogEventType.ROUND_END) == 3
        # Hero hits 3 times, Dummy hits back for 0 twice
        assert len(log.get_entries_by_type(LogEventType.ATTACK_RESOLVED)) == 5

    def test_attack_entries_track_hp(self):
        """Attack entries record the target's HP before and after."""
        _, log = self._run_duel()

        hero_attacks = [e for e in log.get_entries_by_type(LogEventType.ATTACK_RESOLVED) if e.attacker_id == 0]
        assert [(e.state_before.current_hp, e.state_after.current_hp) for e in hero_attacks] == [
            (25, 15),
            (15, 5),
            (5, 0),
        ]

    def test_final_round_is_partial(self):
        """The final round stops after the killing blow."""
        _, log = self._run_duel()

        last_round = log.get_entries_for_round(3)
        attacks = [e for e in last_round if e.event_type == LogEventType.ATTACK_RESOLVED]
        assert len(attacks) == 1
        end = log.get_entries_by_type(LogEventType.COMBAT_END)[0]
        assert end.outcome is Outcome.PLAYERS_WIN
        assert end.round_number == 3

    def test_round_end_has_all_states(self):
        """Round-end snapshots include every combatant."""
        _, log = self._run_duel()

        round_end = log.get_entries_by_type(LogEventType.ROUND_END)[0]
        assert [s.name for s in round_end.all_states] == ["Hero", "Dummy"]
        assert round_end.all_states[1].current_hp == 15

    def test_skipped_turn_logged(self):
        """A turn with no eligible target is logged as skipped."""
        player = make_combatant("Player1", Team.PLAYERS)
        dead = make_combatant("Enemy1", Team.ENEMIES, current_hp=0)
        logger = CombatLogger()
        engine = CombatEngine([player, dead], seed=1, logger=logger)

        assert engine.take_turn(player) is None

        skipped = logger.get_log().get_entries_by_type(LogEventType.TURN_SKIPPED)
        assert len(skipped) == 1
        assert skipped[0].attacker_id == 0
        assert skipped[0].reason == "no eligible targets"

    def test_format_readable(self):
        """The readable format names combatants and the result."""
        _, log = self._run_duel()

        text = log.format_readable()

        assert "=== Combat Log (Combat #1) ===" in text
        assert "--- Round 1 ---" in text
        assert "Hero → Dummy: 10 damage [HP: 25 → 15]" in text
        assert "Dummy [Enemies]: HP=0/25" in text
        assert "RESULT: players_win after 3 rounds" in text

    def test_to_dict_is_serializable(self):
        """The whole log converts to plain data."""
        import json

        _, log = self._run_duel()

        data = json.loads(json.dumps(log.to_dict()))
        assert data["combat_id"] == 1
        assert data["entries"][0]["event_type"] == "combat_start"
        assert data["entries"][-1]["outcome"] == "players_win"

    def test_same_seed_same_log(self, canonical_roster):
        """Seeded combats produce identical logs."""
        logs = []
        for _ in range(2):
            logger = CombatLogger()
            CombatEngine(canonical_roster.build_combatants(), seed=314, logger=logger).run_combat()
            logs.append(logger.get_log().to_dict())

        assert logs[0] == logs[1]
