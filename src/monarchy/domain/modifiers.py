"""Battle modifier resolution.

Maps request context (formation, terrain, races, era, active buffs) onto a
``ModifierSet``.  Resolution never fails: any key the tables do not know
degrades to the neutral value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from .enums import Era, FormationType, TerrainType
from .models import COMBAT_FOCUS, ActiveEffect
from .rules_config import DEFAULT_RULES, CombatRules
from .tables import DEFAULT_TABLES, ModifierTables, RaceModifiers


@dataclass(frozen=True, slots=True)
class ModifierSet:
    """Every modifier that feeds the power calculation.

    Deltas are fractional adjustments (``0.2`` = +20%); bonuses are plain
    multipliers (``1.05`` = +5%).
    """

    formation_offense: float = 0.0
    terrain_defense: float = 0.0
    terrain_offense: float = 0.0
    terrain_cavalry: float = 0.0
    terrain_infantry: float = 0.0
    terrain_siege: float = 0.0
    age_bonus: float = 1.0
    race_offense_bonus: float = 1.0
    race_defense_bonus: float = 1.0
    buff_bonus: float = 1.0


NEUTRAL_MODIFIERS = ModifierSet()


def normalize_formation(
    formation_id: str | None, tables: ModifierTables = DEFAULT_TABLES
) -> FormationType | None:
    """Collapse the historical formation ids onto ``FormationType``.

    Accepts enum values, upper-case enum names, hyphenated ids, and display
    names.  Returns ``None`` for empty or unrecognised input.
    """

    if not formation_id:
        return None
    key = formation_id.strip().lower()
    alias = tables.formation_aliases.get(key)
    if alias is not None:
        return alias
    try:
        return FormationType(key.replace("-", "_").replace(" ", "_"))
    except ValueError:
        return None


def normalize_terrain(terrain_id: str | None) -> TerrainType:
    """Case-insensitive terrain lookup; unknown or missing terrain is plains."""

    if not terrain_id:
        return TerrainType.PLAINS
    try:
        return TerrainType(terrain_id.strip().lower())
    except ValueError:
        return TerrainType.PLAINS


def normalize_era(era: str | None) -> Era | None:
    if not era:
        return None
    try:
        return Era(era.strip().lower())
    except ValueError:
        return None


class ModifierResolver:
    """Resolve modifier sets from injected lookup tables."""

    def __init__(
        self,
        tables: ModifierTables = DEFAULT_TABLES,
        rules: CombatRules = DEFAULT_RULES.combat,
    ) -> None:
        self.tables = tables
        self.rules = rules

    def resolve(
        self,
        *,
        formation_id: str | None = None,
        terrain_id: str | None = None,
        attacker_race: str | None = None,
        defender_race: str | None = None,
        attacker_era: str | None = None,
        attacker_effects: Iterable[ActiveEffect] = (),
        at: datetime | None = None,
    ) -> ModifierSet:
        terrain = self.tables.terrain.get(normalize_terrain(terrain_id))
        terrain_kwargs = {}
        if terrain is not None:
            terrain_kwargs = {
                "terrain_defense": terrain.defense,
                "terrain_offense": terrain.offense,
                "terrain_cavalry": terrain.cavalry,
                "terrain_infantry": terrain.infantry,
                "terrain_siege": terrain.siege,
            }

        return ModifierSet(
            formation_offense=self.formation_offense(formation_id),
            age_bonus=self.age_bonus(attacker_era),
            race_offense_bonus=self._race(attacker_race).offense,
            race_defense_bonus=self._race(defender_race).defense,
            buff_bonus=self.buff_bonus(attacker_effects, at),
            **terrain_kwargs,
        )

    def formation_offense(self, formation_id: str | None) -> float:
        formation = normalize_formation(formation_id, self.tables)
        if formation is None:
            return 0.0
        return self.tables.formation_offense.get(formation, 0.0)

    def age_bonus(self, era: str | None) -> float:
        normalized = normalize_era(era)
        if normalized is None:
            return 1.0
        return self.tables.age_bonus.get(normalized, 1.0)

    def buff_bonus(self, effects: Iterable[ActiveEffect], at: datetime | None) -> float:
        if at is None:
            return 1.0
        for effect in effects:
            if effect.effect_type == COMBAT_FOCUS and effect.is_active(at):
                return self.rules.combat_focus_bonus
        return 1.0

    def _race(self, race: str | None) -> RaceModifiers:
        if not race:
            return RaceModifiers()
        return self.tables.races.get(race.strip().lower(), RaceModifiers())
