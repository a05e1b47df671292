"""Roster schemas - validated combatant definitions and roster loading."""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .engine.types import Combatant, Team
from .errors import RosterError


class CombatantSpec(BaseModel):
    """Definition of one combatant before combat starts."""

    name: str = Field(min_length=1, description="Display name, unique within a roster by convention")
    team: Team = Field(description="Players or Enemies")
    max_hp: int = Field(description="Maximum (and default starting) HP")
    min_damage: int = Field(description="Lowest damage roll, inclusive")
    max_damage: int = Field(description="Highest damage roll, inclusive")
    current_hp: int | None = Field(default=None, description="Starting HP; defaults to max_hp")

    @field_validator("max_hp")
    @classmethod
    def max_hp_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"max_hp must be positive, got {value}")
        return value

    @field_validator("min_damage")
    @classmethod
    def min_damage_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"min_damage must not be negative, got {value}")
        return value

    @model_validator(mode="after")
    def check_ranges(self) -> "CombatantSpec":
        if self.min_damage > self.max_damage:
            raise ValueError(f"min_damage {self.min_damage} is greater than max_damage {self.max_damage}")
        if self.current_hp is not None and not 0 <= self.current_hp <= self.max_hp:
            raise ValueError(f"current_hp {self.current_hp} is outside [0, {self.max_hp}]")
        return self

    def to_combatant(self) -> Combatant:
        """Build a fresh engine Combatant from this spec."""
        return Combatant(
            name=self.name,
            max_hp=self.max_hp,
            min_damage=self.min_damage,
            max_damage=self.max_damage,
            team=self.team,
            current_hp=self.current_hp,
        )


class RosterSpec(BaseModel):
    """An ordered roster; list order is turn order."""

    combatants: list[CombatantSpec] = Field(min_length=1, description="Combatants in turn order")

    @model_validator(mode="after")
    def both_teams_present(self) -> "RosterSpec":
        teams = {c.team for c in self.combatants}
        missing = [team.value for team in Team if team not in teams]
        if missing:
            raise ValueError(f"Roster has no members for: {', '.join(missing)}")
        return self

    @model_validator(mode="after")
    def someone_can_deal_damage(self) -> "RosterSpec":
        living = [c for c in self.combatants if c.current_hp is None or c.current_hp > 0]
        if {c.team for c in living} == set(Team) and not any(c.max_damage > 0 for c in living):
            raise ValueError("No combatant can deal damage")
        return self

    def build_combatants(self) -> list[Combatant]:
        """Build fresh Combatants for one combat."""
        return [spec.to_combatant() for spec in self.combatants]


def build_combatants(roster: RosterSpec) -> list[Combatant]:
    return roster.build_combatants()


def parse_roster(text: str | bytes) -> RosterSpec:
    """Parse a roster from JSON text or raw UTF-8 bytes.

    Raises:
        RosterError: If the JSON is malformed or describes an invalid roster
    """
    try:
        return RosterSpec.model_validate_json(text)
    except ValidationError as e:
        raise RosterError(f"Invalid roster: {e}") from e


def load_roster(path: str | Path) -> RosterSpec:
    """Load and validate a roster from a JSON file."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise RosterError(f"Roster file not found: {path}") from e
    except OSError as e:
        raise RosterError(f"Cannot read roster file {path}: {e}") from e
    return parse_roster(data)


def default_roster() -> RosterSpec:
    """The canonical roster: four players and four enemies, alternating."""
    combatants: list[CombatantSpec] = []
    for i in range(1, 5):
        combatants.append(CombatantSpec(name=f"Player{i}", team=Team.PLAYERS, max_hp=100, min_damage=8, max_damage=15))
        combatants.append(CombatantSpec(name=f"Enemy{i}", team=Team.ENEMIES, max_hp=120, min_damage=10, max_damage=18))
    return RosterSpec(combatants=combatants)
