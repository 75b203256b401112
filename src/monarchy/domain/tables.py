"""Static lookup tables for unit stats and battle modifiers.

The tables are plain immutable data.  ``ModifierResolver`` and the power
functions receive them as arguments so alternate balance sheets can be
swapped in without touching module state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import Era, FormationType, TerrainType


@dataclass(frozen=True, slots=True)
class UnitStats:
    attack: int
    defense: int


@dataclass(frozen=True, slots=True)
class TerrainModifiers:
    """Fractional deltas, e.g. ``0.2`` is +20%."""

    defense: float = 0.0
    offense: float = 0.0
    cavalry: float = 0.0
    infantry: float = 0.0
    siege: float = 0.0


@dataclass(frozen=True, slots=True)
class RaceModifiers:
    offense: float = 1.0
    defense: float = 1.0


DEFAULT_UNIT_STATS = UnitStats(attack=2, defense=2)

UNIT_STATS: Mapping[str, UnitStats] = MappingProxyType(
    {
        "peasant": UnitStats(1, 1),
        "infantry": UnitStats(3, 2),
        "cavalry": UnitStats(5, 3),
        "archer": UnitStats(4, 2),
        "knight": UnitStats(6, 4),
        "mage": UnitStats(3, 1),
        "scout": UnitStats(2, 1),
        "militia": UnitStats(2, 3),
        "tier1": UnitStats(1, 1),
        "tier2": UnitStats(3, 2),
        "tier3": UnitStats(5, 3),
        "tier4": UnitStats(7, 4),
    }
)

TERRAIN_MODIFIERS: Mapping[TerrainType, TerrainModifiers] = MappingProxyType(
    {
        TerrainType.PLAINS: TerrainModifiers(),
        TerrainType.FOREST: TerrainModifiers(defense=0.2, cavalry=-0.1),
        TerrainType.MOUNTAINS: TerrainModifiers(defense=0.3, siege=-0.2),
        TerrainType.SWAMP: TerrainModifiers(
            defense=-0.15, offense=-0.15, cavalry=-0.15, infantry=-0.15
        ),
        TerrainType.DESERT: TerrainModifiers(cavalry=0.15, infantry=-0.1),
        TerrainType.COASTAL: TerrainModifiers(),
    }
)

FORMATION_OFFENSE: Mapping[FormationType, float] = MappingProxyType(
    {
        FormationType.STANDARD: 0.0,
        FormationType.DEFENSIVE_WALL: -0.1,
        FormationType.CAVALRY_CHARGE: 0.3,
        FormationType.BALANCED: 0.1,
        FormationType.AGGRESSIVE: 0.15,
        FormationType.DEFENSIVE: -0.1,
        FormationType.FLANKING: 0.1,
        FormationType.SIEGE: 0.2,
    }
)

# Historical ids used by older clients and saved formations.
FORMATION_ALIASES: Mapping[str, FormationType] = MappingProxyType(
    {
        "defensive-wall": FormationType.DEFENSIVE_WALL,
        "cavalry-charge": FormationType.CAVALRY_CHARGE,
        "defensive wall": FormationType.DEFENSIVE_WALL,
        "cavalry charge": FormationType.CAVALRY_CHARGE,
        "balanced formation": FormationType.BALANCED,
    }
)

# Early age is neutral; the growth bonus lives in the economy, not in combat.
AGE_BONUS: Mapping[Era, float] = MappingProxyType(
    {
        Era.EARLY: 1.0,
        Era.MIDDLE: 1.05,
        Era.LATE: 1.10,
    }
)


def _race(war_offense: int, war_defense: int) -> RaceModifiers:
    # Race sheets rate warfare 1-5 with 3 as the baseline; each point is 5%.
    return RaceModifiers(
        offense=round(1 + (war_offense - 3) * 0.05, 4),
        defense=round(1 + (war_defense - 3) * 0.05, 4),
    )


RACE_MODIFIERS: Mapping[str, RaceModifiers] = MappingProxyType(
    {
        "human": _race(3, 3),
        "elven": _race(2, 4),
        "goblin": _race(4, 3),
        "droben": _race(5, 3),
        "vampire": _race(3, 4),
        "elemental": _race(4, 3),
        "centaur": _race(2, 2),
        "sidhe": _race(2, 3),
        "dwarven": _race(3, 5),
        "fae": _race(3, 3),
    }
)


@dataclass(frozen=True, slots=True)
class ModifierTables:
    """Bundle of every static table the resolver consults."""

    terrain: Mapping[TerrainType, TerrainModifiers] = field(
        default_factory=lambda: TERRAIN_MODIFIERS
    )
    formation_offense: Mapping[FormationType, float] = field(
        default_factory=lambda: FORMATION_OFFENSE
    )
    formation_aliases: Mapping[str, FormationType] = field(
        default_factory=lambda: FORMATION_ALIASES
    )
    age_bonus: Mapping[Era, float] = field(default_factory=lambda: AGE_BONUS)
    races: Mapping[str, RaceModifiers] = field(default_factory=lambda: RACE_MODIFIERS)
    unit_stats: Mapping[str, UnitStats] = field(default_factory=lambda: UNIT_STATS)
    default_unit_stats: UnitStats = DEFAULT_UNIT_STATS

    def stats_for(self, unit_type: str) -> UnitStats:
        return self.unit_stats.get(unit_type, self.default_unit_stats)


DEFAULT_TABLES = ModifierTables()
