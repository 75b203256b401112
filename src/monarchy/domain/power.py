"""Aggregate power and effective unit counts.

Power is ``sum(count * stat * (1 + global_delta + class_delta))`` over the
unit map.  Modifiers are applied to unit counts rather than to the final
power number so casualty maths keeps operating on whole units per type.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from .models import UnitCounts
from .modifiers import ModifierSet
from .tables import DEFAULT_TABLES, ModifierTables

Stat = Literal["attack", "defense"]

CAVALRY = "cavalry"
INFANTRY = "infantry"
SIEGE = "siege"

_INFANTRY_KEYWORDS = ("infantry", "soldier", "militia", "knight")


@dataclass(frozen=True, slots=True)
class ClassDeltas:
    cavalry: float = 0.0
    infantry: float = 0.0
    siege: float = 0.0

    def for_class(self, unit_class: str | None) -> float:
        if unit_class == CAVALRY:
            return self.cavalry
        if unit_class == INFANTRY:
            return self.infantry
        if unit_class == SIEGE:
            return self.siege
        return 0.0


def unit_class(unit_type: str) -> str | None:
    """Classify a unit type by keyword; cavalry wins over siege over infantry."""

    name = unit_type.lower()
    if CAVALRY in name:
        return CAVALRY
    if SIEGE in name:
        return SIEGE
    if any(keyword in name for keyword in _INFANTRY_KEYWORDS):
        return INFANTRY
    return None


def calculate_power(
    units: Mapping[str, int],
    stat: Stat,
    *,
    tables: ModifierTables = DEFAULT_TABLES,
    global_delta: float = 0.0,
    class_deltas: ClassDeltas | None = None,
) -> float:
    """Sum the chosen stat across a unit map."""

    total = 0.0
    for unit_type, count in units.items():
        stats = tables.stats_for(unit_type)
        base = stats.attack if stat == "attack" else stats.defense
        delta = global_delta
        if class_deltas is not None:
            delta += class_deltas.for_class(unit_class(unit_type))
        total += count * base * (1 + delta)
    return total


def scale_units(units: Mapping[str, int], factor: float) -> UnitCounts:
    """Multiply every count by ``factor`` and floor to whole units."""

    # Round first so 100 * 1.15 floors to 115, not 114.
    return {
        unit_type: max(0, math.floor(round(count * factor, 9)))
        for unit_type, count in units.items()
    }


def terrain_ratio(
    units: Mapping[str, int],
    modifiers: ModifierSet,
    tables: ModifierTables = DEFAULT_TABLES,
) -> float:
    """Ratio of terrain-adjusted attack power to raw attack power."""

    raw = calculate_power(units, "attack", tables=tables)
    if raw <= 0:
        return 1.0
    adjusted = calculate_power(
        units,
        "attack",
        tables=tables,
        global_delta=modifiers.terrain_offense,
        class_deltas=ClassDeltas(
            cavalry=modifiers.terrain_cavalry,
            infantry=modifiers.terrain_infantry,
            siege=modifiers.terrain_siege,
        ),
    )
    return adjusted / raw


def effective_attacker_units(
    units: Mapping[str, int],
    modifiers: ModifierSet,
    tables: ModifierTables = DEFAULT_TABLES,
) -> UnitCounts:
    """Apply attacker modifiers in order, flooring after every step.

    Order: formation, era, race offense, active buff, terrain.
    """

    effective = scale_units(units, 1 + modifiers.formation_offense)
    effective = scale_units(effective, modifiers.age_bonus)
    effective = scale_units(effective, modifiers.race_offense_bonus)
    effective = scale_units(effective, modifiers.buff_bonus)
    return scale_units(effective, terrain_ratio(effective, modifiers, tables))


def effective_defender_units(units: Mapping[str, int], modifiers: ModifierSet) -> UnitCounts:
    """Apply race defense then terrain defense, flooring after each step."""

    effective = scale_units(units, modifiers.race_defense_bonus)
    return scale_units(effective, 1 + modifiers.terrain_defense)
